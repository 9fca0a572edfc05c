"""Global pytest configuration."""

from __future__ import annotations

import asyncio
import inspect
import os
from collections.abc import AsyncGenerator
from typing import Callable, Optional

import pytest

from src.resolver.browser_models import LaunchOptions

# Keep a developer .env secret out of tests (dotenv never overrides set vars).
os.environ["API_SECRET"] = ""


# =============================================================================
# Fake browser engine
# =============================================================================


class FakePage:
    """Scripted page: `navigations` are the main-frame URLs seen during goto."""

    def __init__(
        self,
        *,
        navigations: list[str],
        navigate_error: Optional[Exception] = None,
        title: str = "",
        title_error: Optional[Exception] = None,
    ):
        self.navigations = navigations
        self.navigate_error = navigate_error
        self._title = title
        self.title_error = title_error
        self._url = "about:blank"
        self._listeners: list[Callable[[str], None]] = []
        self.allow: Optional[Callable[[str], bool]] = None
        self.user_agent: Optional[str] = None
        self.extra_headers: dict[str, str] = {}
        self.viewport: Optional[tuple[int, int]] = None
        self.goto_calls: list[dict] = []
        self.idle_waits: list[int] = []

    async def set_request_interception_policy(self, allow: Callable[[str], bool]) -> None:
        self.allow = allow

    def on_main_frame_navigated(self, callback: Callable[[str], None]) -> None:
        self._listeners.append(callback)

    async def navigate(self, url: str, *, wait_until: str, timeout_ms: int) -> None:
        self.goto_calls.append({"url": url, "wait_until": wait_until, "timeout_ms": timeout_ms})
        for nav_url in self.navigations:
            self._url = nav_url
            for listener in self._listeners:
                listener(nav_url)
        if self.navigate_error is not None:
            raise self.navigate_error

    async def wait_for_network_idle(self, timeout_ms: int) -> bool:
        self.idle_waits.append(timeout_ms)
        return True

    def current_url(self) -> str:
        return self._url

    async def title(self) -> str:
        if self.title_error is not None:
            raise self.title_error
        return self._title


class FakeSession:
    def __init__(self, page: FakePage, *, close_error: Optional[Exception] = None, page_error: Optional[Exception] = None):
        self.page = page
        self.close_error = close_error
        self.page_error = page_error
        self.closed = False

    async def new_page(self, *, user_agent: str, extra_headers: dict[str, str], viewport: dict) -> FakePage:
        if self.page_error is not None:
            raise self.page_error
        self.page.user_agent = user_agent
        self.page.extra_headers = dict(extra_headers)
        self.page.viewport = (viewport["width"], viewport["height"])
        return self.page

    async def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeEngine:
    """Records launches; each launch returns a fresh session around a new FakePage."""

    def __init__(
        self,
        *,
        navigations: Optional[list[str]] = None,
        navigate_error: Optional[Exception] = None,
        title: str = "Example Domain",
        title_error: Optional[Exception] = None,
        launch_error: Optional[Exception] = None,
        close_error: Optional[Exception] = None,
        page_error: Optional[Exception] = None,
    ):
        self.navigations = navigations
        self.navigate_error = navigate_error
        self.title = title
        self.title_error = title_error
        self.launch_error = launch_error
        self.close_error = close_error
        self.page_error = page_error
        self.launches: list[LaunchOptions] = []
        self.sessions: list[FakeSession] = []

    async def launch(self, options: LaunchOptions) -> FakeSession:
        self.launches.append(options)
        if self.launch_error is not None:
            raise self.launch_error
        page = FakePage(
            navigations=list(self.navigations or []),
            navigate_error=self.navigate_error,
            title=self.title,
            title_error=self.title_error,
        )
        session = FakeSession(page, close_error=self.close_error, page_error=self.page_error)
        self.sessions.append(session)
        return session

    @property
    def last_page(self) -> FakePage:
        return self.sessions[-1].page


@pytest.fixture
def fake_engine_factory():
    return FakeEngine


# =============================================================================
# Async test support
# =============================================================================


@pytest.fixture(scope="session")
def event_loop() -> AsyncGenerator[asyncio.AbstractEventLoop, None]:
    """Provide a shared event loop for async tests and fixtures."""

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        yield loop
    finally:
        loop.close()


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem):  # type: ignore[override]
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        testargs = {
            name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
        }
        loop = testargs.get("event_loop") or asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        loop.run_until_complete(pyfuncitem.obj(**testargs))
        return True
    return None


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "asyncio: mark test as requiring asyncio support")
