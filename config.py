#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Global constants for the SQL script updater
All arbitrary values are centralized here for easy tracking and modification
"""

# =============================================================================
# APPLICATION METADATA
# =============================================================================

APP_NAME = "DbScriptUpdater"             # Used for user data directory names
APP_VERSION = "0.3.0"                    # Application version
APP_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"  # User-Agent header for HTTP requests


# =============================================================================
# NETWORK CONSTANTS
# =============================================================================

SCRIPT_DOWNLOAD_TIMEOUT_S = 30          # Timeout for fetching a remote script
SCRIPT_DOWNLOAD_CHUNK_SIZE = 1024 * 64  # Chunk size for streamed downloads


# =============================================================================
# DATABASE CONSTANTS
# =============================================================================

# One budget for the whole statement batch, not per statement
SQL_SCRIPT_TIMEOUT_S = 5.0
SQL_CONNECT_TIMEOUT_S = 5.0             # Busy timeout when opening the database file
SQL_PROGRESS_HANDLER_OPS = 1000         # VM instructions between timeout checks
SQLITE_CONNECTION_VERSION = 3           # Version clause of the rendered connection string


# =============================================================================
# INTEGRITY CONSTANTS
# =============================================================================

CHECKSUM_READ_CHUNK_SIZE = 1024 * 1024  # Bytes read per hash update
SHA256_HEX_LENGTH = 64                  # Length of a hex-encoded SHA-256 digest


# =============================================================================
# LOGGING CONSTANTS
# =============================================================================

DEFAULT_VERBOSE = False                  # Default verbose logging
LOG_MAX_FILE_SIZE_MB_DEFAULT = 10        # Rotate a log file once it reaches this size
LOG_SEPARATOR_WIDTH = 80                 # Width of separator lines in logs (e.g., "=" * 80)
LOG_MAX_AGE_S = 24 * 60 * 60             # Delete logs older than this on startup


# =============================================================================
# FILE AND DIRECTORY PATHS
# =============================================================================

# Log file patterns
LOG_FILE_PATTERN = "dbscript_*.log"
UPDATER_LOG_FILE_PATTERN = "log_updater_*.log"
LOG_TIMESTAMP_FORMAT = "%d-%m-%Y_%H-%M-%S"  # European format, Windows-compatible

# Sub-directory of the user data dir where downloaded scripts are staged
UPDATE_TEMP_DIR_NAME = "updates"


# =============================================================================
# CLI EXIT CODES
# =============================================================================

EXIT_OK = 0
EXIT_TASK_FAILED = 1
EXIT_PREPARE_FAILED = 2
