"""
Audit log abstraction (port).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class AuditLog(ABC):
    """
    Abstract append-only event recorder.

    Entries are never mutated or pruned by the license engine.
    """

    @abstractmethod
    def record(self, event: str, details: Dict[str, Any]) -> None:
        """
        Append an event.

        Args:
            event: Event name, e.g. ``license.activate``
            details: JSON-serialisable payload
        """
        pass
