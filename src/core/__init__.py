"""src.core package (lightweight).

This file intentionally avoids importing submodules at package import time
so that `src.core` can be imported without reading configuration. Import
submodules explicitly where needed.
"""

from __future__ import annotations

__all__ = []
