"""
Update Context
Per-run settings shared by every task of a batch
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from utils.core.paths import ensure_write_permissions, get_app_dir, get_update_temp_dir

from .exceptions import UpdateProcessFailedException


@dataclass
class UpdateContext:
    """Install location, staging folder and feed URL for one update run"""

    install_dir: Path
    temp_folder: Path
    base_url: str = ""
    progress_callback: Optional[Callable[[int, Optional[int]], None]] = None

    def __post_init__(self):
        self.install_dir = Path(self.install_dir).resolve()
        self.temp_folder = Path(self.temp_folder)

    @classmethod
    def default(cls, base_url: str = "", **kwargs) -> "UpdateContext":
        return cls(install_dir=get_app_dir(), temp_folder=get_update_temp_dir(), base_url=base_url, **kwargs)

    def ensure_temp_folder(self) -> Path:
        self.temp_folder.mkdir(parents=True, exist_ok=True)
        if not ensure_write_permissions(self.temp_folder):
            raise UpdateProcessFailedException(f"Temp folder {self.temp_folder} is not writable")
        return self.temp_folder
