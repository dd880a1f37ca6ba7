"""
Схемы JSON-ответов CLI.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class NamesReport(BaseModel):
    """Ответ команды list: имена фрагментов в порядке объявления."""
    model_config = ConfigDict(extra="forbid")

    names: List[str]


class DialectInfo(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    like_suffix: str
    kind: str


class DialectsReport(BaseModel):
    """Ответ команды dialects."""
    model_config = ConfigDict(extra="forbid")

    dialects: List[DialectInfo]


__all__ = ["NamesReport", "DialectInfo", "DialectsReport"]
