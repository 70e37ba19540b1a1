"""Tests for jog.tasks.parse: headers, bodies, comments and the rest marker."""

from __future__ import annotations

from pathlib import Path

import pytest

from jog.errors import ParseError
from jog.tasks.parse import parse_tasks

PATH = Path("/work/jogfile")


def _parse(text: str):
    return parse_tasks(text, PATH)


# ── Headers ─────────────────────────────────────────────────────────


class TestHeaders:
    """Header lines become task names and parameters."""

    def test_single_task_without_params(self):
        """`build` + `  echo hi` is one task with body 'echo hi\\n'."""
        tasks = _parse("build\n  echo hi\n")
        assert len(tasks) == 1
        task = tasks[0]
        assert task.name == "build"
        assert task.params == ()
        assert task.rest is False
        assert task.body == "echo hi\n"

    def test_params_in_order(self):
        task = _parse("deploy env region\n  true\n")[0]
        assert task.params == ("env", "region")
        assert task.arity == 2

    def test_rest_marker_is_removed(self):
        task = _parse("test filter ...\n  true\n")[0]
        assert task.params == ("filter",)
        assert task.rest is True

    def test_rest_marker_alone(self):
        task = _parse("greet ...\n  true\n")[0]
        assert task.params == ()
        assert task.rest is True

    def test_rest_marker_only_counts_when_last(self):
        task = _parse("odd ... x\n  true\n")[0]
        assert task.params == ("...", "x")
        assert task.rest is False

    def test_extra_whitespace_between_tokens(self):
        task = _parse("greet \t name   greeting  \n  true\n")[0]
        assert task.name == "greet"
        assert task.params == ("name", "greeting")

    def test_duplicate_param_names_are_kept(self):
        """Duplicate parameter names are permitted; binding decides which wins."""
        task = _parse("dup x x\n  true\n")[0]
        assert task.params == ("x", "x")

    def test_header_without_body(self):
        tasks = _parse("noop\nother\n  true\n")
        assert [t.name for t in tasks] == ["noop", "other"]
        assert tasks[0].body == ""

    def test_line_numbers_and_path(self):
        tasks = _parse("# tasks\n\nfirst\n  true\n\nsecond\n  true\n")
        assert [t.line_no for t in tasks] == [3, 6]
        assert all(t.path == PATH for t in tasks)

    def test_empty_file(self):
        assert _parse("") == []

    def test_only_comments_and_blanks(self):
        assert _parse("# nothing here\n\n   \n#another\n") == []


# ── Bodies ──────────────────────────────────────────────────────────


class TestBodies:
    """Indented and blank lines after a header form the body."""

    def test_multi_line_body_keeps_relative_indentation(self):
        text = (
            "check\n"
            "    if true; then\n"
            "        echo yes\n"
            "    fi\n"
        )
        task = _parse(text)[0]
        assert task.body == "if true; then\n    echo yes\nfi\n"

    def test_embedded_blank_lines_are_kept(self):
        task = _parse("two\n  echo one\n\n  echo two\nnext\n  true\n")[0]
        assert task.body == "echo one\n\necho two\n"

    def test_tab_indented_body(self):
        task = _parse("tabbed\n\techo hi\n")[0]
        assert task.body == "echo hi\n"

    def test_body_comment_lines_stay_in_body(self):
        task = _parse("t\n  # explain\n  echo hi\n")[0]
        assert task.body == "# explain\necho hi\n"

    def test_column_zero_comment_ends_body(self):
        tasks = _parse("a\n  echo a\n# about b\nb\n  echo b\n")
        assert [t.name for t in tasks] == ["a", "b"]
        assert tasks[0].body == "echo a\n"
        assert tasks[1].body == "echo b\n"

    def test_missing_trailing_newline(self):
        task = _parse("build\n  make all")[0]
        assert task.body == "make all\n"

    def test_crlf_line_endings(self):
        task = _parse("build\r\n  echo hi\r\n")[0]
        assert task.name == "build"
        assert task.body == "echo hi\n"

    @pytest.mark.parametrize("brk", ["\x0c", "\x0b", "\x85", "\u2028", "\u2029"])
    def test_only_newline_ends_a_line(self, brk):
        tasks = _parse(f"show\n  printf 'a{brk}b'\nnext\n  true\n")
        assert [(t.name, t.line_no) for t in tasks] == [("show", 1), ("next", 3)]
        assert tasks[0].body == f"printf 'a{brk}b'\n"


# ── Errors ──────────────────────────────────────────────────────────


class TestParseErrors:
    """Malformed headers fail the whole file."""

    def test_indented_first_header(self):
        with pytest.raises(ParseError) as excinfo:
            _parse("  build\n    echo hi\n")
        err = excinfo.value
        assert err.line == 1
        assert err.path == PATH
        assert "malformed task: indented header" in str(err)
        assert str(err).startswith(f"{PATH}:1:")

    def test_indented_header_after_comment(self):
        with pytest.raises(ParseError) as excinfo:
            _parse("# comment\n\n\tbuild\n")
        assert excinfo.value.line == 3
