"""Structural test: no broad exception handlers in tmux_status/.

Status reporting must never disturb the host, but that is achieved by
catching the narrow errors filesystem calls raise (``OSError`` and
subclasses). A broad ``except Exception`` would also hide programming
errors, so none is allowed in the package.
"""

import ast
from pathlib import Path
from typing import List, Tuple

PACKAGE_DIR = Path(__file__).parent.parent / "tmux_status"


def _is_broad_exception(handler: ast.ExceptHandler) -> bool:
    """Check if the handler catches Exception, BaseException, or bare except."""
    if handler.type is None:
        return True
    names = handler.type.elts if isinstance(handler.type, ast.Tuple) else [handler.type]
    return any(
        isinstance(n, ast.Name) and n.id in ("Exception", "BaseException")
        for n in names
    )


def _find_broad_catches(filepath: Path) -> List[Tuple[int, str]]:
    source = filepath.read_text()
    tree = ast.parse(source, str(filepath))
    lines = source.splitlines()
    return [
        (node.lineno, lines[node.lineno - 1].strip())
        for node in ast.walk(tree)
        if isinstance(node, ast.ExceptHandler) and _is_broad_exception(node)
    ]


class TestNoBroadExceptions:
    def test_package_files_found(self):
        assert list(PACKAGE_DIR.glob("*.py"))

    def test_no_broad_catches(self):
        violations = {}
        for py_file in sorted(PACKAGE_DIR.rglob("*.py")):
            found = _find_broad_catches(py_file)
            if found:
                violations[py_file.name] = found

        if violations:
            msg = "Broad exception handlers found:\n"
            for name, items in violations.items():
                for lineno, text in items:
                    msg += f"  {name}:{lineno}: {text}\n"
            raise AssertionError(msg)

    def test_detects_broad_catch(self, tmp_path):
        sample = tmp_path / "sample.py"
        sample.write_text("try:\n    pass\nexcept (OSError, Exception):\n    pass\n")
        assert _find_broad_catches(sample) == [(3, "except (OSError, Exception):")]

    def test_ignores_narrow_catch(self, tmp_path):
        sample = tmp_path / "sample.py"
        sample.write_text("try:\n    pass\nexcept OSError:\n    pass\n")
        assert _find_broad_catches(sample) == []
