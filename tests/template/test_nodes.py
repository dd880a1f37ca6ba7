"""
Тесты узлов дерева фрагментов.
"""

import dataclasses

import pytest

from elsql.template.nodes import (
    AndFragment,
    IncludeFragment,
    NameFragment,
    OrFragment,
    TextFragment,
    WhereFragment,
    collect_includes,
    format_tree,
    iter_fragments,
)


class TestTextFragment:

    def test_of_line_trims_and_appends_space(self):
        assert TextFragment.of_line("  SELECT *  ").text == "SELECT * "

    def test_of_line_empty(self):
        assert TextFragment.of_line("   ").text == ""


class TestImmutability:

    def test_nodes_are_frozen(self):
        node = TextFragment("x ")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.text = "y"  # type: ignore[misc]

    def test_connectors(self):
        assert AndFragment.connector == "AND"
        assert OrFragment.connector == "OR"


class TestIncludeFragment:

    def test_name_target(self):
        node = IncludeFragment("Table")
        assert not node.is_variable
        assert node.variable == "Table"

    def test_variable_target(self):
        node = IncludeFragment(":var")
        assert node.is_variable
        assert node.variable == "var"


class TestTreeHelpers:

    def setup_method(self):
        self.tree = NameFragment(name="A", children=(
            TextFragment("SELECT * FROM "),
            IncludeFragment("Table"),
            WhereFragment(children=(
                AndFragment(variable="x", children=(IncludeFragment("Cond"), IncludeFragment(":raw"))),
            )),
        ))

    def test_iter_fragments_depth_first(self):
        kinds = [type(n).__name__ for n in iter_fragments(self.tree)]
        assert kinds == [
            "NameFragment", "TextFragment", "IncludeFragment",
            "WhereFragment", "AndFragment", "IncludeFragment", "IncludeFragment",
        ]

    def test_collect_includes_skips_variables(self):
        assert collect_includes(self.tree) == ["Table", "Cond"]

    def test_format_tree(self):
        text = format_tree(self.tree)
        lines = text.splitlines()
        assert lines[0] == "NameFragment(name='A')"
        assert "  WhereFragment" in lines
        assert "    AndFragment(variable='x')" in lines
