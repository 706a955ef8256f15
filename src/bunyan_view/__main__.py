"""Module entry point so ``python -m bunyan_view`` behaves like ``bunyan-view``."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
