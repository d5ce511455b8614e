"""KeyValueStore protocol: the contract every store implementation satisfies."""

from __future__ import annotations

from typing import Optional, runtime_checkable

from typing_extensions import Protocol


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous string-keyed persistence surface.

    Values are opaque strings (JSON documents in practice). Implementations may
    raise ``OSError`` on write; callers treat persistence as best-effort.
    """

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
