import json

import pytest

from swify.config.loader import load_config, save_config
from swify.config.schema import Config


def test_crawler_config_defaults() -> None:
    crawler = Config().crawler

    assert crawler.browser == "chromium"
    assert crawler.headless is True
    assert crawler.launch_args == ["--no-sandbox", "--disable-setuid-sandbox"]
    assert crawler.search_timeout_ms == 10000
    assert crawler.max_search_results == 3
    assert crawler.image_wait_timeout_ms == 8000
    assert (crawler.image_quality, crawler.image_width, crawler.image_fit) == (80, 1080, "max")
    assert crawler.page_text_timeout_ms == 8000


def test_config_accepts_camel_and_snake_case_keys() -> None:
    camel = Config.model_validate({"crawler": {"maxSearchResults": 2}})
    snake = Config.model_validate({"crawler": {"max_search_results": 2}})

    assert camel.crawler.max_search_results == 2
    assert snake.crawler.max_search_results == 2


def test_save_and_load_config(tmp_path) -> None:
    path = tmp_path / "config.json"
    config = Config()
    config.research.max_queries = 2
    save_config(config, path)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["research"]["maxQueries"] == 2
    assert raw["crawler"]["imageCdnHost"] == "images.unsplash.com"
    assert load_config(path).research.max_queries == 2


def test_load_config_missing_file_gives_defaults(tmp_path) -> None:
    assert load_config(tmp_path / "absent.json") == Config()


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '"just a string"',
        '{"crawler": null, "timeoutMs": 5}',
        '{"research": {"maxQueries": "many"}}',
    ],
)
def test_load_config_falls_back_on_bad_content(tmp_path, content) -> None:
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    assert load_config(path) == Config()
