"""
Общая инфраструктура тестов: файлы, запуск CLI, построители шаблонов.
"""

from .cli_utils import jload, run_cli
from .file_utils import write, write_elsql

__all__ = ["jload", "run_cli", "write", "write_elsql"]
