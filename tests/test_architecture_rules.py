"""Architecture enforcement tests for the layering of ``genai_stream``.

The ``base`` package holds the domain model, the merge engine and the
response iterator. It must stay free of wire types and of the outer
client/chat facade so that it can be exercised with in-memory streams.

These tests are static-file scans to avoid import-time side effects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under ``root``, skipping caches and tests."""

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _scan(root: Path, forbidden: List[str]) -> List[str]:
    offenders: List[str] = []
    for py in _iter_python_files(root):
        src = _read_text(py)
        offenders.extend(f"{py}: contains '{m}'" for m in forbidden if m in src)
    return offenders


def _package_root() -> Path:
    repo_root = Path(__file__).resolve().parent.parent
    root = repo_root / "genai_stream"
    if not root.is_dir():
        pytest.skip("genai_stream package not found; skipping boundary check")
    return root


def test_base_does_not_import_outer_layers() -> None:
    """``genai_stream.base`` must not depend on transport, client or chat."""

    root = _package_root() / "base"
    offenders = _scan(
        root,
        [
            "from genai_stream.transport",
            "import genai_stream.transport",
            "from genai_stream.client",
            "from genai_stream.chat",
            "from ..transport",
            "from ...transport",
            "from ..client",
            "from ..chat",
        ],
    )
    if offenders:
        pytest.fail("Base layer must not import outer layers.\n" + "\n".join(offenders))


def test_wire_library_confined_to_transport() -> None:
    """Only the transport package may touch the generated wire types."""

    root = _package_root()
    offenders = [
        line
        for line in _scan(root, ["from google.ai", "import google.ai"])
        if f"{root / 'transport'}" not in line
    ]
    if offenders:
        pytest.fail("Wire types leaked outside transport.\n" + "\n".join(offenders))
