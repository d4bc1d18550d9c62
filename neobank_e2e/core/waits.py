"""
Condition-based waits.

The banking UI updates in place after each action. Instead of sleeping for a
fixed period, callers poll a condition until it holds or a deadline passes.
Polling goes through ``page.wait_for_timeout`` so Playwright keeps dispatching
events (dialogs in particular) between checks.
"""

import logging
import time
from typing import Callable, Optional, TypeVar

from playwright.sync_api import Locator, Page

from neobank_e2e.exceptions import WaitTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def wait_until(
    page: Page,
    condition: Callable[[], T],
    timeout_ms: float,
    poll_interval_ms: float = 50,
    description: str = "condition",
    observe: Optional[Callable[[], object]] = None,
) -> T:
    """
    Poll condition until it returns a truthy value.

    Args:
        page: Page used to yield to the Playwright event loop between polls
        condition: Zero-argument callable; its first truthy result is returned
        timeout_ms: Upper bound for the whole wait
        poll_interval_ms: Delay between checks
        description: Human-readable name used in the timeout message
        observe: Optional callable whose result is attached to the timeout error

    Raises:
        WaitTimeoutError: If the condition never held
    """
    deadline = time.monotonic() + timeout_ms / 1000
    while True:
        result = condition()
        if result:
            return result
        if time.monotonic() >= deadline:
            last = observe() if observe else None
            raise WaitTimeoutError(description, timeout_ms, last)
        page.wait_for_timeout(poll_interval_ms)


def wait_for_text(
    page: Page,
    locator: Locator,
    predicate: Callable[[str], bool],
    timeout_ms: float,
    poll_interval_ms: float = 50,
    description: str = "text",
) -> str:
    """Poll a locator's text content until predicate accepts it; return the text."""
    seen: dict[str, str] = {"text": ""}

    # The match is wrapped in a tuple so an accepted empty string still counts as truthy.
    def _check() -> Optional[tuple[str]]:
        text = locator.text_content() or ""
        seen["text"] = text
        return (text,) if predicate(text) else None

    (text,) = wait_until(
        page,
        _check,
        timeout_ms,
        poll_interval_ms,
        description=description,
        observe=lambda: seen["text"],
    )
    logger.debug(f"{description}: {text!r}")
    return text


def wait_for_url_fragment(page: Page, fragment: str, timeout_ms: float, poll_interval_ms: float = 50) -> str:
    """Wait until the page URL contains fragment."""
    return wait_until(
        page,
        lambda: page.url if fragment in page.url else None,
        timeout_ms,
        poll_interval_ms,
        description=f"URL containing {fragment!r}",
        observe=lambda: page.url,
    )
