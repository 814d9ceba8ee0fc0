"""
Database driver abstraction
The update task talks to the database only through these interfaces
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .connection_string import ConnectionString


class DatabaseError(Exception):
    """A statement or connection failed inside the database engine"""

    def __init__(self, message: str, code: Optional[int] = None, name: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.name = name

    def __str__(self) -> str:
        base = super().__str__()
        if self.name:
            return f"{base} ({self.name})"
        return base


class DatabaseConnection(ABC):
    """One open connection. Closing is idempotent; context exit always closes."""

    @abstractmethod
    def begin(self, timeout_s: Optional[float] = None) -> None:
        """Start a transaction; ``timeout_s`` bounds everything until commit/rollback"""

    @abstractmethod
    def execute(self, sql: str) -> None:
        """Run one statement inside the current transaction"""

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class DatabaseDriver(ABC):
    """Opens connections described by a ConnectionString"""

    @abstractmethod
    def open(self, connection_string: ConnectionString, create: bool = True) -> DatabaseConnection:
        """Open a connection or raise DatabaseError; with create=False the database must already exist"""

    @abstractmethod
    def probe(self, connection_string: ConnectionString) -> bool:
        """Open, touch and close; True if the database is usable"""
