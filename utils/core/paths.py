#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Path utilities for the updater
Handles user data directories and the staging folder for downloads
"""

import os
import sys
from pathlib import Path

from config import APP_NAME, UPDATE_TEMP_DIR_NAME


def get_user_data_dir() -> Path:
    """
    Get the user data directory where the application can write files.
    This ensures proper permissions regardless of where the app is installed.
    """
    if os.name == "nt":  # Windows
        # Use %LOCALAPPDATA% for user-specific data (logs, staged downloads)
        localappdata = os.environ.get("LOCALAPPDATA")
        if localappdata:
            return Path(localappdata) / APP_NAME
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile) / "AppData" / "Local" / APP_NAME
        # Last resort: current directory
        return Path.cwd() / APP_NAME
    else:  # Linux/macOS
        xdg_data_home = os.environ.get("XDG_DATA_HOME")
        if xdg_data_home:
            return Path(xdg_data_home) / APP_NAME
        return Path.home() / ".local" / "share" / APP_NAME


def get_logs_dir() -> Path:
    """Get the logs directory, creating it if needed."""
    logs_dir = get_user_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def get_update_temp_dir() -> Path:
    """
    Get the folder used to stage downloaded update scripts.
    Creates the directory if it doesn't exist.
    """
    temp_dir = get_user_data_dir() / UPDATE_TEMP_DIR_NAME
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir


def get_app_dir() -> Path:
    """
    Get the main application directory (where the exe is located).
    This is the base that relative database paths are resolved against.
    """
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        return Path(sys.executable).parent
    # Running as script
    # __file__ is utils/core/paths.py, so we need to go up 3 levels to get to root
    return Path(__file__).parent.parent.parent


def ensure_write_permissions(path: Path) -> bool:
    """
    Ensure that the given path is writable.
    Returns True if writable, False otherwise.
    """
    try:
        test_file = path / ".write_test"
        test_file.touch()
        test_file.unlink()
        return True
    except (OSError, PermissionError):
        return False
