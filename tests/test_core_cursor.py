"""Tests for the immutable Cursor and DepthGuard."""

import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langkit.core import Cursor, DepthGuard
from langkit.core.depth_guard import depth_clamp
from langkit.diagnostics import DepthLimitExceededError, DiagnosticCode

# ============================================================================
# CURSOR
# ============================================================================


class TestCursor:
    """Immutable scanning primitives."""

    def test_advance_returns_new_cursor(self) -> None:
        cursor = Cursor("hello")
        advanced = cursor.advance()
        assert cursor.current == "h"
        assert advanced.current == "e"

    def test_advance_clamps_at_eof(self) -> None:
        assert Cursor("ab").advance(10).pos == 2

    def test_current_at_eof_raises(self) -> None:
        with pytest.raises(EOFError):
            _ = Cursor("").current

    def test_peek_beyond_eof_is_none(self) -> None:
        assert Cursor("a").peek(1) is None

    def test_slice_to(self) -> None:
        assert Cursor("hello").slice_to(3) == "hel"
        assert Cursor("hello world", 6).slice_to(9) == "wor"

    def test_take_while(self) -> None:
        cursor = Cursor("  x").take_while(" ")
        assert cursor.pos == 2
        assert Cursor("abc").take_while("xyz").pos == 0
        assert Cursor("aaa").take_while("a").is_eof

    def test_startswith_at_position(self) -> None:
        assert Cursor("a//b", 1).startswith("//")
        assert not Cursor("a//b").startswith("//")

    def test_skip_to_line_end_stops_before_newline(self) -> None:
        cursor = Cursor("abc\ndef").skip_to_line_end()
        assert cursor.pos == 3
        assert cursor.current == "\n"

    def test_skip_to_line_end_without_newline(self) -> None:
        assert Cursor("abc").skip_to_line_end().is_eof

    def test_line_col(self) -> None:
        assert Cursor("line1\nline2", 8).line_col() == (2, 3)
        assert Cursor("abc", 0).line_col() == (1, 1)
        assert Cursor("ab\n", 3).line_col() == (2, 1)

    def test_skip_to_line_end_stops_at_carriage_return(self) -> None:
        assert Cursor("ab\r\ncd").skip_to_line_end().pos == 2

    @given(st.text(max_size=30), st.integers(min_value=0, max_value=40))
    def test_advance_never_exceeds_source(self, text: str, count: int) -> None:
        assert Cursor(text).advance(count).pos <= len(text)


# ============================================================================
# DEPTH GUARD
# ============================================================================


class TestDepthGuard:
    """Recursion limiting for document traversal."""

    def test_tracks_depth(self) -> None:
        guard = DepthGuard(5)
        with guard.at("a"):
            assert guard.depth == 1
            with guard.at("a.b"):
                assert guard.depth == 2
        assert guard.depth == 0

    def test_raises_at_limit_with_location(self) -> None:
        guard = DepthGuard(1)
        with guard.at("a"), pytest.raises(DepthLimitExceededError) as exc_info:
            with guard.at("a.b"):
                pass
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.MAX_DEPTH_EXCEEDED
        assert diagnostic.location == "a.b"

    def test_refused_level_leaves_counter_untouched(self) -> None:
        guard = DepthGuard(1)
        with guard.at("a"):
            with pytest.raises(DepthLimitExceededError):
                with guard.at("a.b"):
                    pass
            assert guard.depth == 1
        assert guard.depth == 0

    def test_error_inside_block_releases_level(self) -> None:
        guard = DepthGuard(3)
        with pytest.raises(KeyError):
            with guard.at("a"):
                raise KeyError("a")
        assert guard.depth == 0

    def test_limit_is_clamped(self) -> None:
        assert DepthGuard(sys.getrecursionlimit() * 2).limit == sys.getrecursionlimit() - 50

    def test_clamp_against_recursion_limit(self) -> None:
        limit = sys.getrecursionlimit()
        assert depth_clamp(limit * 2) == limit - 50
        assert depth_clamp(10) == 10
