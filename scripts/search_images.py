# Path: scripts/search_images.py
# Purpose: Run the image search CLI straight from a source checkout.
# Layer: scripts.
# Details: Thin wrapper around imgsearch.cli.main for use without installing the package.

from __future__ import annotations

import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from imgsearch.cli import main

if __name__ == "__main__":
    sys.exit(main())
