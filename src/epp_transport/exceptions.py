"""
EPP Transport Exceptions

Exception hierarchy for EPP transport operations.
"""


class EPPError(Exception):
    """Base EPP exception."""

    def __init__(self, message: str, code: int = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class EPPConnectionError(EPPError):
    """Transport could not be initialized or connected."""

    def __init__(self, message: str = "Connection failed"):
        super().__init__(message)


class EPPTransportError(EPPError):
    """Document transmission failed or the server signalled failure."""

    def __init__(self, message: str = "Transport error", status_code: int = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self):
        if self.status_code:
            return f"{self.message} (HTTP status = {self.status_code})"
        return self.message


class EPPTimeoutError(EPPError):
    """Exchange exceeded the configured read timeout."""

    def __init__(self, message: str = "Read timeout", timeout: float = None):
        super().__init__(message)
        self.timeout = timeout


class EPPTransportStateError(EPPError):
    """Transport used outside its connected window, or read with nothing pending."""

    def __init__(self, message: str = "Invalid transport state"):
        super().__init__(message)


class EPPFrameError(EPPError):
    """EPP frame encoding/decoding error."""

    def __init__(self, message: str = "Frame error"):
        super().__init__(message)


class EPPConfigError(EPPError):
    """Invalid or incomplete transport configuration."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message)
