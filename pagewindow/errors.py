# pagewindow/errors.py

class PagewindowError(Exception):
    """Base class for all pagewindow errors."""
    pass


class ConfigurationError(PagewindowError):
    """Error related to dataset options or configuration files."""

    def __init__(self, option: str, message: str):
        super().__init__(message)
        self.option = option


class FetchRejection(PagewindowError):
    """
    Raised by a fetch implementation to reject a page.

    The optional reason ends up on the page's ``error`` field as-is.
    """

    def __init__(self, reason=None):
        super().__init__(reason)
        self.reason = reason


class FetchContractError(PagewindowError):
    """The fetch capability produced a payload or stats of an unsupported shape."""
    pass


class InvalidOffsetError(PagewindowError, ValueError):
    """A read offset that is not a non-negative integer."""
    pass
