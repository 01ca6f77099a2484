#!/usr/bin/env python3
"""
Keep ec_fdk.core usable without the CLI or the MCP server.

Fails when a module under src/ec_fdk/core/ imports click, mcp, or one of the
outer ec_fdk layers (cli, tools, transports, models). An optional argument
points the check at another directory.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "ec_fdk" / "core"

FORBIDDEN_PREFIXES = (
    "click",
    "fastmcp",
    "mcp",
    "ec_fdk.cli",
    "ec_fdk.models",
    "ec_fdk.tools",
    "ec_fdk.transports",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def imported_modules(tree: ast.AST) -> Iterator[str]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            yield node.module


def scan_file(path: Path) -> List[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    return [
        f"{path}: forbidden import '{mod}'"
        for mod in imported_modules(tree)
        if is_forbidden(mod)
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    core_dir = Path(args[0]) if args else CORE_DIR

    violations: List[str] = []
    for py_file in sorted(core_dir.rglob("*.py")):
        violations.extend(scan_file(py_file))

    for v in violations:
        print(v, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
