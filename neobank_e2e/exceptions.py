"""Exceptions raised by the interaction layer."""


class BankingUIError(Exception):
    """Base class for interaction-layer failures."""


class UIStateError(BankingUIError):
    """The UI is missing an element or shows text that cannot be interpreted."""


class WaitTimeoutError(UIStateError):
    """A polled condition did not hold before its deadline."""

    def __init__(self, description: str, timeout_ms: float, last_value=None):
        self.description = description
        self.timeout_ms = timeout_ms
        self.last_value = last_value
        message = f"Timed out after {timeout_ms:.0f}ms waiting for {description}"
        if last_value is not None:
            message += f" (last observed: {last_value!r})"
        super().__init__(message)


class DialogMismatchError(BankingUIError):
    """Browser dialogs did not arrive in the declared order, type or count."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))
