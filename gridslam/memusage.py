"""Reporting the data and virtual size of a process from its status file."""

from __future__ import annotations

import os
import sys
from typing import Dict, Iterator, Optional, TextIO, Tuple

_LABELS = ("VmData:", "VmSize:")


def _default_path() -> str:
    return f"/proc/{os.getpid()}/status"


def _entries(status_path: Optional[str]) -> Iterator[Tuple[str, str]]:
    try:
        with open(status_path or _default_path(), encoding="utf-8") as handle:
            tokens = handle.read().split()
    except OSError:
        return
    it = iter(tokens)
    for token in it:
        if token in _LABELS:
            value = next(it, None)
            if value is None:
                return
            yield token[:-1], value


def memory_usage(status_path: Optional[str] = None) -> Dict[str, str]:
    """``VmData`` and ``VmSize`` values found in the status file.

    A file that cannot be read gives an empty result.
    """
    return dict(_entries(status_path))


def print_memory_usage(
    stream: Optional[TextIO] = None, status_path: Optional[str] = None
) -> None:
    """Write ``#VmData:`` and ``#VmSize:`` lines, by default to standard error."""
    out = stream if stream is not None else sys.stderr
    for label, value in _entries(status_path):
        out.write(f"#{label}:\t{value}\n")