"""
In-memory stand-ins for the Playwright async API objects a DriverSession
touches: starter, playwright, browser type, browser, context, page, locator.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self._page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    async def is_visible(self) -> bool:
        return self.selector in self._page.visible

    async def fill(self, value: str, **kwargs) -> None:
        self._page.actions.append(("fill", self.selector, value))
        self._page.values[self.selector] = value

    async def click(self, **kwargs) -> None:
        self._page.actions.append(("click", self.selector))
        handler = self._page.on_click.get(self.selector)
        if handler is not None:
            handler(self._page)

    async def text_content(self) -> Optional[str]:
        return self._page.texts.get(self.selector)

    async def all_text_contents(self) -> List[str]:
        text = self._page.texts.get(self.selector)
        return [text] if text is not None else []


class FakePage:
    def __init__(self):
        self.url = "about:blank"
        self.html = "<html></html>"
        self.viewport_size: Optional[Dict[str, int]] = {"width": 1920, "height": 1080}
        self.visible: set = set()
        self.texts: Dict[str, str] = {}
        self.values: Dict[str, str] = {}
        self.actions: List[tuple] = []
        self.on_click: Dict[str, Callable[["FakePage"], None]] = {}
        self.goto_error: Optional[Exception] = None
        self.goto_status = 200
        self.goto_calls: List[str] = []
        self.screenshots: List[str] = []
        self.close_calls = 0

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    async def goto(self, url: str, wait_until: str = "load", timeout: float = 0) -> FakeResponse:
        self.goto_calls.append(url)
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url
        return FakeResponse(self.goto_status)

    async def content(self) -> str:
        return self.html

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        data = b"\x89PNG\r\n\x1a\n"
        if path:
            Path(path).write_bytes(data)
            self.screenshots.append(path)
        return data

    async def close(self) -> None:
        self.close_calls += 1


class FakeContext:
    def __init__(self, page: FakePage, options: dict):
        self.page = page
        self.options = options
        self.default_timeout = None
        self.default_navigation_timeout = None
        self.close_calls = 0

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.default_navigation_timeout = timeout

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self) -> None:
        self.close_calls += 1


class FakeBrowser:
    def __init__(self, playwright: "FakePlaywright"):
        self._playwright = playwright
        self.contexts: List[FakeContext] = []
        self.close_calls = 0
        self.close_error: Optional[Exception] = None

    async def new_context(self, **options) -> FakeContext:
        context = FakeContext(self._playwright.page, options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class FakeBrowserType:
    def __init__(self, playwright: "FakePlaywright", name: str):
        self._playwright = playwright
        self.name = name
        self.launch_options: List[dict] = []
        self.launch_error: Optional[Exception] = None

    async def launch(self, **options) -> FakeBrowser:
        self.launch_options.append(options)
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(self._playwright)
        self._playwright.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self):
        self.page = FakePage()
        self.browsers: List[FakeBrowser] = []
        self.chromium = FakeBrowserType(self, "chromium")
        self.firefox = FakeBrowserType(self, "firefox")
        self.webkit = FakeBrowserType(self, "webkit")
        self.start_calls = 0
        self.stop_calls = 0

    async def stop(self) -> None:
        self.stop_calls += 1


class FakePlaywrightStarter:
    def __init__(self, playwright: FakePlaywright):
        self._playwright = playwright

    async def start(self) -> FakePlaywright:
        self._playwright.start_calls += 1
        return self._playwright

