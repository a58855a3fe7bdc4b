"""Ephemeral, session-scoped storage.

Mirrors a browser tab's session storage: values are strings, live only as
long as the session object, and are never written anywhere durable.
"""


class SessionStorage:
    """In-memory key/value store for one client session."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
