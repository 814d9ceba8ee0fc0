#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utils Package - Utility functions and helpers

- core: logging, user data paths and file checksums
"""

# Import paths first (doesn't depend on config logging setup)
from utils.core.paths import get_user_data_dir, get_logs_dir, get_update_temp_dir, get_app_dir


# Lazy imports for modules that depend on config (to avoid circular imports)
def __getattr__(name):
    """Lazy import for modules that may have circular dependencies"""
    if name in {'get_logger', 'get_named_logger', 'setup_logging', 'log_section', 'log_success', 'get_log_mode'}:
        from utils.core import logging as _logging
        return getattr(_logging, name)

    if name in {'compute_sha256', 'verify_sha256', 'normalize_digest', 'ChecksumComputationError'}:
        from utils.core import checksum as _checksum
        return getattr(_checksum, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'get_user_data_dir', 'get_logs_dir', 'get_update_temp_dir', 'get_app_dir',
    'get_logger', 'get_named_logger', 'setup_logging', 'log_section', 'log_success', 'get_log_mode',
    'compute_sha256', 'verify_sha256', 'normalize_digest', 'ChecksumComputationError',
]
