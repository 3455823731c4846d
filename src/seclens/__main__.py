"""CLI entrypoint for seclens."""

from __future__ import annotations

from seclens.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
