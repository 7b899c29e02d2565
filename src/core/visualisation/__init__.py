"""Visualisation elements and their readiness tracking."""

from __future__ import annotations

from .element import Element

__all__ = ["Element"]
