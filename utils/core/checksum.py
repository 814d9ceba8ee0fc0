#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
File checksum utilities
Computes SHA-256 digests of downloaded files and compares them to expected values
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Union

from config import CHECKSUM_READ_CHUNK_SIZE


class ChecksumComputationError(OSError):
    """Raised when a file digest cannot be computed (missing or unreadable file)"""

    def __init__(self, path: Union[str, os.PathLike], reason: str):
        super().__init__(f"Cannot compute checksum of {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


def normalize_digest(digest: str) -> str:
    """Return a digest in the canonical lowercase form used for comparisons"""
    return (digest or "").strip().lower()


def compute_sha256(path: Union[str, os.PathLike], chunk_size: int = CHECKSUM_READ_CHUNK_SIZE) -> str:
    """Compute the SHA-256 digest of a file

    Args:
        path: File to hash
        chunk_size: Bytes read per update

    Returns:
        Lowercase hex digest

    Raises:
        ChecksumComputationError: If the file cannot be read
    """
    hasher = hashlib.sha256()
    try:
        with open(path, "rb") as fh:
            for chunk in iter(lambda: fh.read(chunk_size), b""):
                hasher.update(chunk)
    except OSError as exc:
        raise ChecksumComputationError(path, exc.strerror or str(exc)) from exc
    return hasher.hexdigest()


def verify_sha256(path: Union[str, os.PathLike], expected: str) -> bool:
    """Check a file against an expected SHA-256 digest

    A mismatch returns False; a file that cannot be read raises
    ChecksumComputationError instead.
    """
    return compute_sha256(path) == normalize_digest(expected)
