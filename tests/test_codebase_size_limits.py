from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
MAX_LINES = 400

# Rendering belongs to external consumers of the sample batches.
_PLOTTING_MODULES = ("matplotlib", "plotly", "seaborn", "PySide6", "PyQt")


def _source_files() -> list[Path]:
    return sorted([*(ROOT / "projectlab").rglob("*.py"), *(ROOT / "tests").rglob("*.py")])


def test_all_python_files_are_at_most_400_lines() -> None:
    """Maintainability guardrail: modules stay small and focused."""

    offenders: list[tuple[str, int]] = []
    for p in _source_files():
        n = len(p.read_text(encoding="utf-8").splitlines())
        if n > MAX_LINES:
            offenders.append((str(p.relative_to(ROOT)).replace("\\", "/"), n))
    assert not offenders, (
        f"Python files must be <= {MAX_LINES} lines. Offenders:\n"
        + "\n".join(f"- {path}: {n}" for path, n in offenders)
    )


def test_engine_does_not_import_plotting_libraries() -> None:
    # Scans source text so it passes whether or not those libraries are installed.
    offenders: list[str] = []
    for p in (ROOT / "projectlab").rglob("*.py"):
        txt = p.read_text(encoding="utf-8")
        if any(f"import {m}" in txt or f"from {m}" in txt for m in _PLOTTING_MODULES):
            offenders.append(p.name)

    assert not offenders, f"plotting imports found under projectlab/: {offenders}"
