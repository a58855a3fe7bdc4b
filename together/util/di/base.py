"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests can swap for in-memory or recording fakes
Component = Literal["persistence", "notification", "archival"]


class ProviderBase(Provider):
    """Provider carrying the metadata the container builders select on.

    Attributes:
        __mock_component__: Component this provider supplies, None when the
            provider is always used as-is
        __is_mock__: True for test doubles
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
