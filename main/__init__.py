#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for the SQL script updater
"""

import sys
from typing import Optional, Sequence

from config import EXIT_OK, EXIT_PREPARE_FAILED, EXIT_TASK_FAILED
from launcher import apply_sql_script
from launcher.update.exceptions import TaskConfigError, UpdateProcessFailedException
from utils.core.logging import get_logger, log_success

from .setup import (
    build_context,
    build_source,
    setup_arguments,
    setup_logging_and_cleanup,
    task_attributes,
)

log = get_logger()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Program entry point; returns the process exit code."""
    args = setup_arguments(argv)
    setup_logging_and_cleanup(args)

    try:
        context = build_context(args)
        applied = apply_sql_script(
            task_attributes(args),
            build_source(args),
            context,
            status_callback=lambda message: log.info(message),
        )
    except (TaskConfigError, UpdateProcessFailedException) as exc:
        log.error(f"Update failed: {exc}")
        return EXIT_PREPARE_FAILED

    if not applied:
        log.error("Update failed: the script was rolled back, see the updater log for the failing statement")
        return EXIT_TASK_FAILED

    log_success(log, "Database update applied")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
