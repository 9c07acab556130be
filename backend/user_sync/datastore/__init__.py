"""Datastore clients."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseDatastore(ABC):
    """Table-oriented access to the hosted datastore.
    
    Filters are equality matches, ``{"email": "a@x.com"}``. Failures are raised
    as ``DatastoreError`` carrying the datastore's own message.
    """
    
    @abstractmethod
    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return the rows of ``table`` matching ``filters``."""
        pass
    
    @abstractmethod
    async def insert(
        self,
        table: str,
        rows: List[Dict[str, Any]],
        returning: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        Insert ``rows`` into ``table``.
        Returns: the stored rows, or an empty list when ``returning`` is False
        """
        pass
    
    @abstractmethod
    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Update the rows matching ``filters`` and return them."""
        pass
    
    async def ping(self) -> tuple[bool, str, float]:
        """
        Check that the datastore is reachable.
        Returns: (success, message, latency_ms)
        """
        return True, "Connected.", 0.0
    
    async def aclose(self) -> None:
        """Release any held connections."""
        pass
