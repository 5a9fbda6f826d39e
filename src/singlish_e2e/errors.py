"""
Failure taxonomy for the translator harness.

Navigation, setup and processing failures are raised as the exceptions
below. A translation that differs from the expected text is not an error
of the harness; the suite reports it as an ordinary assertion failure.
"""

from typing import Optional, Sequence


class HarnessError(Exception):
    """Base class for failures that stop a scenario before comparison."""

    kind = "harness"


class NavigationError(HarnessError):
    """Target page could not be loaded within the attempt budget."""

    kind = "navigation"

    def __init__(self, url: str, attempts: int, last_error: Optional[BaseException] = None):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Navigation to {url} failed after {attempts} attempt(s): {last_error}"
        )


class SetupError(HarnessError):
    """The target page's structure no longer matches the harness selectors."""

    kind = "setup"


class InputNotFoundError(SetupError):

    def __init__(self, selectors: Sequence[str]):
        self.selectors = list(selectors)
        super().__init__(
            "Input area not found - selectors tried: " + ", ".join(self.selectors)
        )


class OutputSelectorNotFoundError(SetupError):

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Output selector not found: {selector}")


class OutputTimeoutError(HarnessError):
    """Output container exists but stayed empty until the timeout."""

    kind = "timeout"

    def __init__(self, selector: str, timeout: int):
        self.selector = selector
        self.timeout = timeout
        super().__init__(
            f"Output in {selector} stayed empty for {timeout}ms"
        )
