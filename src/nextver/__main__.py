"""Allow running as ``python -m nextver``."""

from __future__ import annotations

from nextver.cli.app import main

if __name__ == "__main__":
    main()
