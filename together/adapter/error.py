"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class DeliveryError(AdapterError):
    """An outbound service rejected or failed to receive a call."""

    pass
