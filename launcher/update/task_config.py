"""
Task configuration
Typed parameters for each task kind, built from declarative attributes
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from config import SHA256_HEX_LENGTH
from utils.core.checksum import normalize_digest

from .exceptions import TaskConfigError

_HEX_DIGEST = re.compile(rf"^[0-9a-f]{{{SHA256_HEX_LENGTH}}}$")


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class SQLiteScriptTaskConfig:
    """Parameters of a sqliteScript task.

    Attribute names in manifests: ``scriptFile``, ``dbFile``, ``pwd`` and
    ``sha256-checksum``. Missing ``scriptFile``/``dbFile`` are allowed
    here; the task itself turns them into a no-op.
    """

    script_file: str = ""
    db_file: str = ""
    password: Optional[str] = None
    sha256_checksum: Optional[str] = None

    ATTRIBUTE_NAMES = {
        "scriptFile": "script_file",
        "dbFile": "db_file",
        "pwd": "password",
        "sha256-checksum": "sha256_checksum",
    }

    def __post_init__(self):
        checksum = _optional_str(self.sha256_checksum)
        if checksum is not None:
            checksum = normalize_digest(checksum)
            if not _HEX_DIGEST.match(checksum):
                raise TaskConfigError(
                    f"sha256-checksum must be {SHA256_HEX_LENGTH} hex characters, got {self.sha256_checksum!r}"
                )
        object.__setattr__(self, "sha256_checksum", checksum)
        object.__setattr__(self, "script_file", _optional_str(self.script_file) or "")
        object.__setattr__(self, "db_file", _optional_str(self.db_file) or "")
        # Passwords are taken verbatim; only an empty value means "none"
        object.__setattr__(self, "password", self.password or None)

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> "SQLiteScriptTaskConfig":
        unknown = sorted(set(attributes) - set(cls.ATTRIBUTE_NAMES))
        if unknown:
            raise TaskConfigError(f"Unknown sqliteScript attribute(s): {', '.join(unknown)}")
        kwargs: Dict[str, Any] = {
            cls.ATTRIBUTE_NAMES[key]: value for key, value in attributes.items()
        }
        return cls(**kwargs)

    def to_attributes(self) -> Dict[str, str]:
        names = {field_name: attr for attr, field_name in self.ATTRIBUTE_NAMES.items()}
        return {
            names[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name)
        }

    @property
    def is_noop(self) -> bool:
        return not self.script_file or not self.db_file
