"""chartwheel command line interface package."""

from __future__ import annotations

from typing import Optional, Sequence

from .app import app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return its exit status."""

    try:
        app(args=list(argv) if argv is not None else None, prog_name="chartwheel")
    except SystemExit as exc:
        code = exc.code
        return code if isinstance(code, int) else (0 if code is None else 1)
    return 0


__all__ = ["app", "main"]
