"""
SQLite connection string
Immutable description of which database file to open and with which key
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from config import SQLITE_CONNECTION_VERSION

MASK = "***"


@dataclass(frozen=True)
class ConnectionString:
    """Where and how to open a database.

    Rendered as ``Data Source=<path>;Version=3;`` followed by
    ``Password=<pwd>;`` when a password is set. ``str()`` and ``repr()``
    always mask the password so the object is safe to log.
    """

    data_source: Path
    password: Optional[str] = field(default=None, repr=False)
    version: int = SQLITE_CONNECTION_VERSION

    def __post_init__(self):
        object.__setattr__(self, "data_source", Path(self.data_source))
        # An empty password means no credential clause at all
        if not self.password:
            object.__setattr__(self, "password", None)

    @property
    def has_password(self) -> bool:
        return self.password is not None

    def render(self, reveal: bool = False) -> str:
        text = f"Data Source={self.data_source};Version={self.version};"
        if self.has_password:
            text += f"Password={self.password if reveal else MASK};"
        return text

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ConnectionString({self.render()!r})"
