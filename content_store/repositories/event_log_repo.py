"""
Event Log Repository Interface

Defines the audit sink for security-relevant actions.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class EventLogRepository(ABC):
    """
    Event Log Repository Interface

    ``log`` has no failure outcome: implementations handle and discard
    their own errors so an audit write can never change the result of the
    action being audited.
    """

    @abstractmethod
    async def log(self, event: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Append an audit event (best effort)

        Args:
            event: Event name, e.g. ``admin_login``
            details: JSON-compatible event details
        """
        pass
