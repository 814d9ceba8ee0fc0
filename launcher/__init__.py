#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Launcher package
Main entry point for update functionality
"""

from .updater import apply_sql_script
from .update.update_sequence import UpdateSequence

__all__ = [
    'apply_sql_script',
    'UpdateSequence',
]
