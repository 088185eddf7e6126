#!/usr/bin/env python3
"""
Fill the configured storage area with fake tracks.

Run with:
    python scripts/seed.py [count]
"""

import sys

from trackstore.data.seed import main

if __name__ == "__main__":
    sys.exit(main())
