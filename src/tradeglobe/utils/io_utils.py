# SPDX-License-Identifier: Apache-2.0
"""Stream helpers for the CLI: trade CSVs in, JSON exports out.

``-`` stands for the process's stdin/stdout. Standard streams are never
closed by these helpers.
"""

from __future__ import annotations

import io
import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Iterator, TextIO

STDIO = "-"


def is_stdio(target: str | Path) -> bool:
    return str(target) == STDIO


@contextmanager
def open_csv(source: str | Path) -> Iterator[TextIO]:
    """Yield a text stream over a CSV file or stdin.

    A UTF-8 byte-order mark (common in spreadsheet exports) is dropped and
    newlines are left for :mod:`csv` to handle.
    """

    if is_stdio(source):
        text = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8-sig", newline="")
        try:
            yield text
        finally:
            text.detach()
        return
    with Path(source).expanduser().open("r", encoding="utf-8-sig", newline="") as fh:
        yield fh


@contextmanager
def open_output(target: str | Path) -> Iterator[BinaryIO]:
    """Yield a binary writer for ``target``, creating missing parent folders."""

    if is_stdio(target):
        yield sys.stdout.buffer
        sys.stdout.buffer.flush()
        return
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as fh:
        yield fh


def write_json(payload: Any, target: str | Path, *, indent: int = 2) -> None:
    """Write ``payload`` as indented UTF-8 JSON followed by a newline."""

    with open_output(target) as fh:
        fh.write((json.dumps(payload, indent=indent) + "\n").encode("utf-8"))
