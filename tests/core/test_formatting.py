"""Tests for summary formatting helpers."""

from refsweep.core.formatting import compress_path, format_path_list, pluralize


class TestCompressPath:
    def test_short_path_unchanged(self) -> None:
        assert compress_path("lib/a.ml") == "lib/a.ml"

    def test_deep_path_compressed(self) -> None:
        assert compress_path("lib/parsing/lexer/internal/tokens.ml", 25) == "lib/.../tokens.ml"

    def test_two_part_path_not_compressed(self) -> None:
        long = "directory_with_long_name/file_with_long_name.ml"
        assert compress_path(long, 10) == long


class TestFormatPathList:
    def test_empty(self) -> None:
        assert format_path_list([]) == ""

    def test_single(self) -> None:
        assert format_path_list(["lib/a.ml"]) == "lib/a.ml"

    def test_two(self) -> None:
        assert format_path_list(["a.ml", "b.ml"]) == "a.ml, b.ml"

    def test_overflow(self) -> None:
        assert format_path_list(["a.ml", "b.ml", "c.ml", "d.ml"]) == "a.ml, b.ml, +2 more"


class TestPluralize:
    def test_singular(self) -> None:
        assert pluralize(1, "usage") == "1 usage"

    def test_plural(self) -> None:
        assert pluralize(3, "usage") == "3 usages"

    def test_zero_is_plural(self) -> None:
        assert pluralize(0, "file") == "0 files"

    def test_custom_plural(self) -> None:
        assert pluralize(2, "match", "matches") == "2 matches"
