"""Command line entry point for the bitmap decoder."""

from __future__ import annotations

from bmp_decoder.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
