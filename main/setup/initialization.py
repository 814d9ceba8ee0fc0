#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Initialization setup (logging and update context)
"""

import argparse

from launcher.update.context import UpdateContext
from launcher.update.sources import HttpSource, LocalFolderSource, UpdateSource
from utils.core.logging import cleanup_logs, get_logger, log_section, setup_logging
from utils.core.paths import get_app_dir, get_update_temp_dir

log = get_logger()


def setup_logging_and_cleanup(args: argparse.Namespace) -> str:
    """Setup logging and clean up old logs; returns the log mode"""
    cleanup_logs()

    if args.debug:
        log_mode = 'debug'
    elif args.verbose:
        log_mode = 'verbose'
    else:
        log_mode = 'customer'

    setup_logging(log_mode, write_logs=not args.no_log_files)

    if log_mode != 'customer':
        log_section(log, "SQL Script Update", {
            "Script": args.script_file or "-",
            "Database": args.db_file or "-",
            "Source": args.base_url or args.source_dir,
        })
    return log_mode


def build_context(args: argparse.Namespace) -> UpdateContext:
    """Create the update context from CLI arguments"""
    return UpdateContext(
        install_dir=args.install_dir or get_app_dir(),
        temp_folder=args.temp_dir or get_update_temp_dir(),
        base_url=args.base_url or "",
    )


def build_source(args: argparse.Namespace) -> UpdateSource:
    if args.source_dir is not None:
        return LocalFolderSource(args.source_dir)
    return HttpSource()
