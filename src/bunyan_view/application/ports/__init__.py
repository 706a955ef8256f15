"""Ports separating the formatting core from its I/O collaborators."""

from __future__ import annotations

from .output import OutputPort

__all__ = ["OutputPort"]
