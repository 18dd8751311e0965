"""Interfaces for the data clients the guarded services dispatch to.

The governance core performs no I/O; a host application supplies concrete
clients (for example a wrapper around its hosted database SDK).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class AuthClient(ABC):
    """Authentication backend."""

    @abstractmethod
    async def sign_up(self, email: str, password: str, username: str) -> Any:
        """Create an account and set its username. Raises on failure."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Any:
        """Start a session. Raises on bad credentials."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session."""


class RecordClient(ABC):
    """Record store for the host application's entities."""

    @abstractmethod
    async def insert(self, table: str, document: Dict[str, Any]) -> Any:
        """Insert a document and return the stored record."""

    @abstractmethod
    async def update(self, table: str, record_id: str, document: Dict[str, Any]) -> Any:
        """Apply a partial document to a record and return it."""

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> None:
        """Delete a record."""
