#!/usr/bin/env python3
"""Launch the tickerbar TUI with sane defaults."""
from __future__ import annotations

import os

from tickerbar.main import main


if __name__ == "__main__":
    os.environ.setdefault("TICKERBAR_LOG_LEVEL", "INFO")
    main()
