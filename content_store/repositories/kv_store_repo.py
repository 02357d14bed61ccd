"""
Key-Value Store Repository Interface

Defines the data access interface for KV Store.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import JsonValue


class KVStoreRepository(ABC):
    """
    Key-Value Store Repository Interface

    Keys are opaque strings; callers may give them structure by convention
    (``"<kind>:<site>:<id>"``) but the store only ever looks at prefixes.
    Values are JSON trees and are always returned as copies.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[JsonValue]:
        """
        Get value by key

        Args:
            key: The key to look up

        Returns:
            The stored value, or None if the key doesn't exist
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: Any) -> None:
        """
        Insert or overwrite a key in one atomic statement

        Args:
            key: The key to set
            value: JSON-compatible value to store

        Raises:
            ValidationError: value is not JSON-compatible
        """
        pass

    @abstractmethod
    async def put_if_absent(self, key: str, value: Any) -> JsonValue:
        """
        Store ``value`` only if the key does not exist yet

        Concurrent callers all receive the same, first-committed value.

        Returns:
            The value stored under the key after the call
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a key

        Deleting a missing key is not an error.

        Returns:
            True if deleted, False if key didn't exist
        """
        pass

    @abstractmethod
    async def list_keys_with_prefix(self, prefix: str) -> list[str]:
        """
        List keys starting with ``prefix``

        The prefix is matched literally; ``%`` and ``_`` have no special meaning.

        Returns:
            Matching keys in descending key order
        """
        pass
