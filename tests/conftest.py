from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass
class FakeSite:
    """What the fake page serves for one URL."""

    data: Any = None
    goto_error: Exception | None = None
    wait_error: Exception | None = None


class FakeRequest:
    def __init__(self, resource_type: str):
        self.resource_type = resource_type


class FakeRoute:
    def __init__(self):
        self.aborted = False
        self.continued = False

    async def abort(self, error_code: str | None = None) -> None:
        self.aborted = True

    async def continue_(self) -> None:
        self.continued = True


class FakePage:
    def __init__(self, sites: dict[str, FakeSite], user_agent: str | None = None):
        self.sites = sites
        self.user_agent = user_agent
        self.routes: list[tuple[str, Any]] = []
        self.gotos: list[dict[str, Any]] = []
        self.waits: list[dict[str, Any]] = []
        self.close_calls = 0
        self._current = FakeSite()

    async def route(self, pattern: str, handler: Any) -> None:
        self.routes.append((pattern, handler))

    async def goto(self, url: str, wait_until: str | None = None, timeout: int | None = None):
        self.gotos.append(
            {
                "url": url,
                "wait_until": wait_until,
                "timeout": timeout,
                "filtered": bool(self.routes),
            }
        )
        self._current = self.sites.get(url, FakeSite())
        if self._current.goto_error:
            raise self._current.goto_error
        return None

    async def wait_for_selector(self, selector: str, timeout: int | None = None):
        self.waits.append({"selector": selector, "timeout": timeout})
        if self._current.wait_error:
            raise self._current.wait_error
        return object()

    async def evaluate(self, script: str) -> Any:
        return self._current.data

    async def close(self) -> None:
        self.close_calls += 1


@dataclass
class FakeBrowser:
    sites: dict[str, FakeSite] = field(default_factory=dict)
    new_page_error: Exception | None = None
    pages: list[FakePage] = field(default_factory=list)
    close_calls: int = 0

    async def new_page(self, user_agent: str | None = None) -> FakePage:
        if self.new_page_error:
            raise self.new_page_error
        page = FakePage(self.sites, user_agent=user_agent)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.close_calls += 1


class FakeBrowserType:
    def __init__(self, owner: "FakePlaywrightFactory"):
        self.owner = owner

    async def launch(self, headless: bool = True, args: list[str] | None = None) -> FakeBrowser:
        self.owner.launches.append({"headless": headless, "args": args})
        if self.owner.launch_error:
            raise self.owner.launch_error
        browser = FakeBrowser(sites=self.owner.sites, new_page_error=self.owner.new_page_error)
        self.owner.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, owner: "FakePlaywrightFactory"):
        self.chromium = FakeBrowserType(owner)
        self.firefox = self.chromium
        self.webkit = self.chromium

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakePlaywrightFactory:
    """Stands in for ``async_playwright``; every call launches a new fake browser."""

    def __init__(self):
        self.sites: dict[str, FakeSite] = {}
        self.launch_error: Exception | None = None
        self.new_page_error: Exception | None = None
        self.launches: list[dict[str, Any]] = []
        self.browsers: list[FakeBrowser] = []

    def __call__(self) -> FakePlaywright:
        return FakePlaywright(self)

    @property
    def pages(self) -> list[FakePage]:
        return [page for browser in self.browsers for page in browser.pages]


@pytest.fixture
def fake_playwright(monkeypatch) -> FakePlaywrightFactory:
    factory = FakePlaywrightFactory()
    monkeypatch.setattr("swify.crawler.browser.async_playwright", factory)
    return factory
