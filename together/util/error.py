"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings that cannot be used as configured."""

    pass


class JWTError(UtilError):
    """Identity token could not be verified."""

    pass


class ExpiredTokenError(JWTError):
    """Identity token is past its ``exp`` claim."""

    pass
