"""
Shared pytest setup.

Inserts the project `src/` onto sys.path so tests run without installing the
package, and provides hypothesis strategies used across test modules.
"""

from __future__ import annotations

import pathlib
import sys

# Ensure `src/` is importable when running `pytest` from the repo root
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))
