"""Module entrypoint for the ticker TUI.

Run:
  python -m tickerbar
"""

from __future__ import annotations

from .main import main


if __name__ == "__main__":
    main()
