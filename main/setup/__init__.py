#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup subpackage
"""

from .arguments import setup_arguments, task_attributes
from .initialization import build_context, build_source, setup_logging_and_cleanup

__all__ = [
    'build_context',
    'build_source',
    'setup_arguments',
    'setup_logging_and_cleanup',
    'task_attributes',
]
