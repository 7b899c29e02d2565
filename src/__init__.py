"""Top-level src package.

Expose a lightweight `core` attribute by importing the minimal
`src.core` package to make string-based patch targets work in tests
(e.g. "src.core.connections.pool.build_connection_id").
"""

from __future__ import annotations

import importlib
from types import ModuleType

core: ModuleType = importlib.import_module("src.core")

__all__: list[str] = ["core"]
