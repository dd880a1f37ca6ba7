"""
Utilities for working with CLI in tests.
"""

import json
import os
import subprocess
import sys
from pathlib import Path


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    """
    Runs elsql.cli with specified arguments in the given directory.

    Args:
        root: Working directory for command execution
        *args: Command line arguments for elsql.cli

    Returns:
        CompletedProcess with execution results
    """
    env = os.environ.copy()
    # Пакет берётся из рабочего дерева, даже если не установлен
    project_root = str(Path(__file__).resolve().parents[2])
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [project_root, env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "elsql.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


def jload(s: str):
    """Parses JSON output of a CLI command."""
    return json.loads(s)
