"""
Тесты вычислителя условий @AND/@OR/@IF.
"""

from elsql.params import MapParameterSource
from elsql.template.evaluator import ConditionEvaluator


class TestConditionEvaluator:

    def evaluator(self, **values):
        return ConditionEvaluator(MapParameterSource(values))

    def test_absent_is_false(self):
        assert self.evaluator().is_match("var") is False
        assert self.evaluator().is_match("var", "x") is False

    def test_present_non_boolean_is_true(self):
        """Любое заданное значение, кроме False, даёт истину."""
        for value in ("val", "", 0, None, [], object()):
            assert self.evaluator(var=value).is_match("var") is True

    def test_booleans_used_as_is(self):
        assert self.evaluator(var=True).is_match("var") is True
        assert self.evaluator(var=False).is_match("var") is False

    def test_match_value_compares_string_form(self):
        assert self.evaluator(var="Point").is_match("var", "Point") is True
        assert self.evaluator(var="NoPoint").is_match("var", "Point") is False
        assert self.evaluator(var=5).is_match("var", "5") is True

    def test_match_value_is_case_sensitive(self):
        assert self.evaluator(var="point").is_match("var", "Point") is False

    def test_boolean_match_values(self):
        assert self.evaluator(var=False).is_match("var", "false") is True
        assert self.evaluator(var=False).is_match("var", "true") is False
        assert self.evaluator(var=True).is_match("var", "true") is True
        assert self.evaluator(var=True).is_match("var", "false") is False
