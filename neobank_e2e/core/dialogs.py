"""
Scripted answers for browser dialogs.

Update and delete flows in the banking UI are driven by ``prompt()`` and
``confirm()`` dialogs. A DialogScript declares the exact sequence expected for
one operation: each step names the dialog type, an optional message fragment
and the answer. The script is attached for the duration of a ``with`` block
only, and any deviation (wrong type, wrong message, an extra dialog, or a
dialog that never arrived) is raised as DialogMismatchError when the block
exits.

Example:
    script = DialogScript(page, [
        DialogStep.prompt("Alice"),
        DialogStep.prompt("1111111111"),
        DialogStep.prompt("Chase Bank"),
    ], timeout_ms=3000)
    with script:
        page.click('.edit-btn[data-id="3"]')
        script.wait_until_complete()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from playwright.sync_api import Dialog, Page

from neobank_e2e.core.waits import wait_until
from neobank_e2e.exceptions import DialogMismatchError, WaitTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DialogStep:
    """One expected dialog and how to answer it."""

    dialog_type: str
    accept: bool = True
    prompt_text: Optional[str] = None
    message_contains: Optional[str] = None

    @classmethod
    def prompt(cls, text: str, message_contains: Optional[str] = None) -> "DialogStep":
        return cls("prompt", True, text, message_contains)

    @classmethod
    def confirm(cls, accept: bool = True, message_contains: Optional[str] = None) -> "DialogStep":
        return cls("confirm", accept, None, message_contains)

    def describe(self) -> str:
        hint = f" mentioning {self.message_contains!r}" if self.message_contains else ""
        return f"{self.dialog_type}{hint}"


@dataclass
class HandledDialog:
    """Record of a dialog that reached the script."""

    index: int
    dialog_type: str
    message: str
    answered: bool


@dataclass
class DialogScript:
    """Ordered, validated dialog responses for a single UI operation."""

    page: Page
    steps: list[DialogStep]
    timeout_ms: float = 3000
    poll_interval_ms: float = 50
    handled: list[HandledDialog] = field(default_factory=list)
    problems: list[str] = field(default_factory=list)

    def __enter__(self) -> "DialogScript":
        self.page.on("dialog", self._handle)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.page.remove_listener("dialog", self._handle)
        if exc_type is None:
            self.verify()

    @property
    def complete(self) -> bool:
        return len(self.handled) >= len(self.steps)

    def _handle(self, dialog: Dialog) -> None:
        index = len(self.handled)
        message = dialog.message

        if index >= len(self.steps):
            self.problems.append(
                f"Unexpected extra {dialog.type} dialog #{index + 1}: {message!r}"
            )
            self.handled.append(HandledDialog(index, dialog.type, message, answered=False))
            dialog.dismiss()
            return

        step = self.steps[index]
        mismatch = None
        if dialog.type != step.dialog_type:
            mismatch = f"expected {step.describe()}, got {dialog.type}"
        elif step.message_contains and step.message_contains.lower() not in message.lower():
            mismatch = f"expected {step.describe()}, got message {message!r}"

        if mismatch:
            self.problems.append(f"Dialog #{index + 1}: {mismatch}")
            self.handled.append(HandledDialog(index, dialog.type, message, answered=False))
            dialog.dismiss()
            return

        logger.debug(f"Answering {dialog.type} #{index + 1} ({message!r})")
        self.handled.append(HandledDialog(index, dialog.type, message, answered=True))
        if not step.accept:
            dialog.dismiss()
        elif step.prompt_text is not None:
            dialog.accept(step.prompt_text)
        else:
            dialog.accept()

    def wait_until_complete(self) -> None:
        """Block until every step was consumed or a mismatch occurred."""
        try:
            wait_until(
                self.page,
                lambda: self.complete or bool(self.problems),
                self.timeout_ms,
                self.poll_interval_ms,
                description=f"{len(self.steps)} dialog(s)",
                observe=lambda: len(self.handled),
            )
        except WaitTimeoutError:
            missing = [step.describe() for step in self.steps[len(self.handled):]]
            self.problems.append(f"Dialogs never shown: {', '.join(missing)}")

    def verify(self) -> None:
        """Raise DialogMismatchError if the observed sequence deviated from the script."""
        problems = list(self.problems)
        if not self.complete and not any(p.startswith("Dialogs never shown") for p in problems):
            missing = [step.describe() for step in self.steps[len(self.handled):]]
            problems.append(f"Dialogs never shown: {', '.join(missing)}")
        if problems:
            raise DialogMismatchError(problems)
