"""Tests for search output parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from refsweep.search.parser import banner_length, normalize_result_path, parse_result_line
from refsweep.semantic.models import Position

ROOT = Path("/proj")


class TestParseResultLine:
    def test_parses_vimgrep_line(self) -> None:
        candidate = parse_result_line("lib/a.ml:10:6:  let x = count + 1", ROOT)

        assert candidate is not None
        assert candidate.path == "lib/a.ml"
        assert candidate.line == 10
        assert candidate.column == 6
        assert candidate.text == "  let x = count + 1"
        assert candidate.position == Position(ROOT / "lib/a.ml", 10, 5)

    def test_strips_dot_slash_prefix(self) -> None:
        candidate = parse_result_line("./lib/a.ml:1:5:let count = 0", ROOT)
        assert candidate is not None
        assert candidate.path == "lib/a.ml"
        assert candidate.position.file == ROOT / "lib/a.ml"

    def test_text_may_contain_colons(self) -> None:
        candidate = parse_result_line("a.ml:3:1:x :: y : int", ROOT)
        assert candidate is not None
        assert candidate.text == "x :: y : int"

    def test_render_reproduces_line(self) -> None:
        raw = "lib/a.ml:10:6:  let x = count + 1"
        candidate = parse_result_line(raw, ROOT)
        assert candidate is not None
        assert candidate.render() == raw

    @pytest.mark.parametrize(
        "raw",
        ["", "-*- refsweep usages -*-", "lib/a.ml:10:text", "lib/a.ml:0:1:x", "lib/a.ml:1:0:x"],
    )
    def test_non_result_lines(self, raw: str) -> None:
        assert parse_result_line(raw, ROOT) is None


class TestNormalizeResultPath:
    def test_noop_without_prefix(self) -> None:
        assert normalize_result_path("lib/a.ml") == "lib/a.ml"

    def test_repeated_prefix(self) -> None:
        assert normalize_result_path("././a.ml") == "a.ml"


class TestBannerLength:
    def test_no_banner(self) -> None:
        assert banner_length(["a.ml:1:1:x", "b.ml:2:1:x"], ROOT) == 0

    def test_banner_closed_by_blank_line(self) -> None:
        lines = ["-*- header -*-", "second header line", "", "a.ml:1:1:x"]
        assert banner_length(lines, ROOT) == 3

    def test_unterminated_header_is_not_a_banner(self) -> None:
        assert banner_length(["junk", "a.ml:1:1:x"], ROOT) == 0

    def test_empty_buffer(self) -> None:
        assert banner_length([], ROOT) == 0
