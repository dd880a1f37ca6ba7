"""
Тесты построчной модели шаблона.
"""

import pytest

from elsql.errors import ElSqlFormatError
from elsql.template.lines import Line, read_lines, split_text


class TestLine:

    def test_indent_counts_leading_spaces(self):
        assert Line("    SELECT", 1).indent == 4
        assert Line("SELECT", 1).indent == 0

    def test_trimmed(self):
        assert Line("  SELECT * FROM foo  ", 3).trimmed == "SELECT * FROM foo"

    def test_comment_and_blank_detection(self):
        assert Line("-- comment", 1).is_comment()
        assert Line("    --indented comment", 1).is_comment()
        assert Line("   ", 1).is_comment()
        assert not Line("  SELECT -- trailing", 1).is_comment()

    def test_with_text_keeps_number(self):
        line = Line("  SELECT @INCLUDE(x) rest", 7).with_text(" rest")
        assert line.number == 7
        assert line.trimmed == "rest"


class TestReadLines:

    def test_comments_and_blanks_removed_numbers_kept(self):
        lines = read_lines([
            "@NAME(Test1)",
            "  SELECT * FROM",
            "--  foo",
            "",
            "  WHERE TRUE",
        ])
        assert [line.number for line in lines] == [1, 2, 5]
        assert [line.trimmed for line in lines] == ["@NAME(Test1)", "SELECT * FROM", "WHERE TRUE"]

    def test_line_terminators_stripped(self):
        lines = read_lines(["@NAME(A)\r\n", "  x\n"])
        assert lines[0].text == "@NAME(A)"
        assert lines[1].text == "  x"

    def test_tab_rejected_with_line_number(self):
        with pytest.raises(ElSqlFormatError) as exc:
            read_lines(["@NAME(A)", "  SELECT", "\tFROM foo"])
        assert exc.value.line_number == 3
        assert "line 3" in str(exc.value)

    def test_tab_in_comment_also_rejected(self):
        """Табуляция запрещена везде, включая комментарии."""
        with pytest.raises(ElSqlFormatError):
            read_lines(["--\tcomment"])

    def test_split_text(self):
        assert split_text("a\nb\r\nc") == ["a", "b", "c"]
