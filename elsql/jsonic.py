from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """
    JSON для ответов CLI: без prettify, ensure_ascii=False.
    Завершающий перевод строки добавляет CLI.
    """
    return json.dumps(obj, ensure_ascii=False)
