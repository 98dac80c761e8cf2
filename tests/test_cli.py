import json

from swify import cli
from swify.crawler.models import SearchResult


def test_search_command_prints_results(monkeypatch, tmp_path, capsys) -> None:
    async def fake_scrape_web(query, config=None):
        return {"organic": [SearchResult(title=f"{query} title", href="https://e.com", snippet="same")]}

    monkeypatch.setattr("swify.cli.scrape_web", fake_scrape_web)

    code = cli.main(["--config", str(tmp_path / "missing.json"), "search", "a", "b"])

    out = capsys.readouterr().out
    assert code == 0
    assert "## a" in out and "1. b title" in out
    assert "Total deduplicated snippets: 1" in out


def test_image_command_exit_codes(monkeypatch, tmp_path, capsys) -> None:
    async def fake_scrape_images(query, fallback_query=None, config=None):
        return "https://images.unsplash.com/x?q=80" if query == "hit" else None

    monkeypatch.setattr("swify.cli.scrape_images", fake_scrape_images)
    config_arg = ["--config", str(tmp_path / "missing.json")]

    assert cli.main([*config_arg, "image", "hit"]) == 0
    assert "https://images.unsplash.com/x?q=80" in capsys.readouterr().out
    assert cli.main([*config_arg, "image", "miss", "--fallback", "broad"]) == 1


def test_command_failure_returns_error_code(monkeypatch, tmp_path) -> None:
    async def broken(query, fallback_query=None, config=None):
        raise RuntimeError("no browser")

    monkeypatch.setattr("swify.cli.scrape_images", broken)

    assert cli.main(["--config", str(tmp_path / "missing.json"), "image", "x"]) == 2


def test_research_command_outputs_json(monkeypatch, tmp_path, capsys) -> None:
    async def fake_scrape_web(query, config=None):
        return {"organic": [SearchResult(title="T", href="https://e.com/t", snippet="S")]}

    monkeypatch.setattr("swify.research.aggregator.scrape_web", fake_scrape_web)

    code = cli.main(["--config", str(tmp_path / "missing.json"), "research", "topic"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["sources"] == [{"title": "T", "href": "https://e.com/t"}]
    assert payload["context"] == "S"
