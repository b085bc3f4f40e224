"""Batch mode: evaluate every logical line of one or more files."""
from __future__ import annotations
import logging
import os
import sys
from typing import List

from .diagnostics import format_error, format_number
from .evaluator import evaluate_lines

log = logging.getLogger(__name__)


def run_file(path: str, out=None, err=None, color: bool = True):
    """Prints `<source> [<line>]: <value>` per logical line of `path`.

    Raises OSError if the file cannot be read; evaluation errors are reported
    on `err` and never stop the remaining lines.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    name = os.path.basename(path) or path

    log.info("Processing file: %s", name)
    with open(path, "r", encoding="utf-8") as f:
        data = f.read()

    print(f"--- Results from {name} ---", file=out)
    for result in evaluate_lines(data):
        if result.ok:
            print(f"{result.source} [{result.line}]: {format_number(result.value)}", file=out)
        else:
            print(f"Error in {name}:", file=err)
            print(format_error(result.error, color=color), file=err)
    print(file=out)


def run_file_mode(files: List[str], out=None, err=None, color: bool = True) -> int:
    """Runs every file in turn. Returns 1 if any file could not be read."""
    err = err or sys.stderr
    status = 0
    for path in files:
        try:
            run_file(path, out=out, err=err, color=color)
        except OSError as e:
            log.error("cannot read %s: %s", path, e)
            print(f"error: cannot read '{path}': {e.strerror or e}", file=err)
            status = 1
    return status
