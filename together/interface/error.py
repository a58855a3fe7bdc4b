"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class UnauthenticatedError(InterfaceError):
    """No valid identity token on the request."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)
