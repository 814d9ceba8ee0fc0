#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Database package
Connection strings, the driver abstraction and the SQLite driver
"""

from .connection_string import ConnectionString
from .driver import DatabaseConnection, DatabaseDriver, DatabaseError
from .sqlite_driver import SQLiteConnection, SQLiteDriver

__all__ = [
    'ConnectionString',
    'DatabaseConnection',
    'DatabaseDriver',
    'DatabaseError',
    'SQLiteConnection',
    'SQLiteDriver',
]
