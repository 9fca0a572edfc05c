"""Redirect chain tracking."""

from __future__ import annotations

from .browser_constants import BLANK_PAGE_URL


class RedirectChainTracker:
    """Ordered log of main-frame URLs seen during one resolution.

    Owned by a single resolution, so callbacks never race across sessions.
    """

    def __init__(self, original_url: str):
        self.original_url = original_url
        self._urls: list[str] = [original_url]

    def record(self, url: str | None) -> None:
        """Append a navigated URL, ignoring empty and blank-page URLs."""
        if not url or url == BLANK_PAGE_URL:
            return
        self._urls.append(url)

    @property
    def observed(self) -> list[str]:
        return list(self._urls)

    def finalize(self) -> list[str]:
        """Return the chain de-duplicated in first-seen order."""
        return list(dict.fromkeys(self._urls))
