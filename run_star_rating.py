#!/usr/bin/env python3
"""Entry point for the star rating demo.

This script starts the star rating demo window, or renders the control to a
PNG when given ``--render``. It can be run directly from a source checkout.
"""

import sys
from pathlib import Path

# Add the parent directory to path so we can import star_rating_view
sys.path.insert(0, str(Path(__file__).parent))

from star_rating_view.app import main

if __name__ == "__main__":
    sys.exit(main())
