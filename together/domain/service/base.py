"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the pairing and unbind rules that span more than one
    aggregate (a space, its invite code, its unbind requests).
    """

    pass
