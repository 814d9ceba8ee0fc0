#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line argument parsing
"""

import argparse
from pathlib import Path
from typing import Optional, Sequence

from config import APP_VERSION, DEFAULT_VERBOSE


def setup_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse and return command line arguments"""
    ap = argparse.ArgumentParser(
        description="Download a SQL script and apply it to a local SQLite database in one transaction"
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # General arguments
    ap.add_argument("--verbose", action="store_true", default=DEFAULT_VERBOSE,
                   help="Enable verbose logging (developer mode - shows all technical details)")
    ap.add_argument("--debug", action="store_true", default=False,
                   help="Enable ultra-detailed debug logging (includes function traces)")
    ap.add_argument("--no-log-files", action="store_true", default=False,
                   help="Log to the console only")

    # Task attributes (same names as in update manifests)
    ap.add_argument("--script-file", dest="script_file", default="",
                   help="Script name relative to the update source (scriptFile)")
    ap.add_argument("--db-file", dest="db_file", default="",
                   help="Database path relative to the install directory (dbFile)")
    ap.add_argument("--pwd", dest="pwd", default=None,
                   help="Database password, if the database is encrypted (pwd)")
    ap.add_argument("--sha256", dest="sha256", default=None,
                   help="Expected SHA-256 of the downloaded script (sha256-checksum)")

    # Source and locations
    source = ap.add_mutually_exclusive_group(required=True)
    source.add_argument("--base-url", type=str, default=None,
                        help="Base URL of the update feed")
    source.add_argument("--source-dir", type=Path, default=None,
                        help="Local folder to take the script from instead of HTTP")
    ap.add_argument("--install-dir", type=Path, default=None,
                   help="Application install directory (defaults to the app directory)")
    ap.add_argument("--temp-dir", type=Path, default=None,
                   help="Folder for staged downloads (defaults to the user data dir)")

    return ap.parse_args(argv)


def task_attributes(args: argparse.Namespace) -> dict:
    """Map parsed arguments onto sqliteScript manifest attributes"""
    attributes = {"scriptFile": args.script_file, "dbFile": args.db_file}
    if args.pwd:
        attributes["pwd"] = args.pwd
    if args.sha256:
        attributes["sha256-checksum"] = args.sha256
    return attributes
