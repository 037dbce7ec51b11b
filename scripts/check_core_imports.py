#!/usr/bin/env python3
"""
Fail if core imports the HTTP transport layer.
Checks all Python files under src/backand_sdk/core/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = REPO_ROOT / "src"
CORE_DIR = SRC_DIR / "backand_sdk" / "core"

FORBIDDEN_PREFIXES = (
    "httpx",
    "respx",
    "backand_sdk.transport",
    "backand_sdk.client",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def resolve_module(path: Path, node: ast.ImportFrom) -> str:
    """Absolute dotted name for a (possibly relative) from-import."""
    if not node.level:
        return node.module or ""
    package = list(path.relative_to(SRC_DIR).with_suffix("").parts[:-1])
    base = package[: len(package) - (node.level - 1)]
    if node.module:
        base.append(node.module)
    return ".".join(base)


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                mod = alias.name
                if is_forbidden(mod):
                    errors.append(f"{path}: forbidden import '{mod}'")
        elif isinstance(node, ast.ImportFrom):
            mod = resolve_module(path, node)
            candidates = [mod] + [f"{mod}.{alias.name}" for alias in node.names]
            if any(is_forbidden(c) for c in candidates if c):
                errors.append(f"{path}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in CORE_DIR.rglob("*.py"):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
