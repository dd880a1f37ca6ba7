"""
Вычислитель условий для тегов @AND, @OR и @IF.

Все три тега используют одну и ту же проверку переменной.
"""

from __future__ import annotations

from typing import Optional

from ..params import ParameterSource, to_sql_string


class ConditionEvaluator:
    """
    Оценщик условий в контексте источника параметров.

    Правила:
    - переменная не задана - ложь;
    - задано значение сравнения - истина, если строковая форма значения
      в точности совпадает с ним (с учётом регистра);
    - иначе булево значение используется как есть, а любое другое
      заданное значение (включая пустую строку и 0) даёт истину.
    """

    def __init__(self, params: ParameterSource):
        self.params = params

    def is_match(self, variable: str, match_value: Optional[str] = None) -> bool:
        """
        Проверяет условие для переменной.

        Args:
            variable: Имя переменной без двоеточия
            match_value: Необязательное значение для сравнения

        Returns:
            Результат проверки
        """
        if not self.params.has_value(variable):
            return False

        value = self.params.get_value(variable)
        if match_value is not None:
            return to_sql_string(value) == match_value

        if isinstance(value, bool):
            return value
        return True


__all__ = ["ConditionEvaluator"]
