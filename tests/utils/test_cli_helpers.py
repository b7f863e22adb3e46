# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import argparse
import logging

import numpy as np

from tradeglobe.transform import CategoryNode
from tradeglobe.utils.cli_helpers import (
    VERBOSITY_ENV,
    apply_verbosity,
    configure_logging_from_env,
    env_int,
)
from tradeglobe.utils.io_utils import is_stdio, open_csv, open_output, write_json
from tradeglobe.utils.serialize import dumps, to_obj
from tradeglobe.visualization.commands import PopClip, Segment


def test_env_int(monkeypatch, caplog) -> None:
    monkeypatch.setenv("TRADEGLOBE_STAR_SEED", "42")
    assert env_int("STAR_SEED", 1) == 42
    monkeypatch.setenv("TRADEGLOBE_STAR_SEED", "abc")
    with caplog.at_level(logging.WARNING):
        assert env_int("STAR_SEED", 1) == 1
    assert "non-integer" in caplog.text
    monkeypatch.delenv("TRADEGLOBE_STAR_SEED")
    assert env_int("STAR_SEED", 7) == 7


def test_verbosity_flags_configure_root_logger(monkeypatch) -> None:
    monkeypatch.setenv(VERBOSITY_ENV, "info")
    apply_verbosity(argparse.Namespace(verbose=True, quiet=False))
    configure_logging_from_env()
    assert logging.getLogger().level == logging.DEBUG
    monkeypatch.setenv(VERBOSITY_ENV, "quiet")
    configure_logging_from_env()
    assert logging.getLogger().level == logging.WARNING


def test_to_obj_tags_draw_commands() -> None:
    assert to_obj(PopClip()) == {"command": "pop_clip"}
    seg = to_obj(Segment(np.float64(1.0), 2, 3, 4, "#fff", 1.5))
    assert seg["command"] == "segment"
    assert isinstance(seg["x0"], float)
    assert to_obj(CategoryNode("A", 1.0)) == {"id": "A", "value": 1.0, "kind": "category"}
    assert dumps({"a": (1, 2)}, indent=None) == '{"a": [1, 2]}'


def test_open_output_creates_parents(tmp_path) -> None:
    target = tmp_path / "nested" / "dir" / "out.json"
    with open_output(str(target)) as fh:
        fh.write(b"{}")
    assert target.read_text() == "{}"


def test_open_csv_drops_byte_order_mark(tmp_path) -> None:
    source = tmp_path / "exports.csv"
    source.write_bytes("\ufeffCountry,VALUE\r\nFrance,1\r\n".encode("utf-8"))
    with open_csv(source) as fh:
        assert fh.readline().rstrip("\r\n") == "Country,VALUE"


def test_write_json_to_path_and_stdout(tmp_path, capsys) -> None:
    target = tmp_path / "out" / "arcs.json"
    write_json({"arcs": []}, target)
    assert target.read_text(encoding="utf-8") == '{\n  "arcs": []\n}\n'
    write_json([1], "-", indent=None)
    assert capsys.readouterr().out == "[1]\n"
    assert is_stdio("-") and not is_stdio(target)
