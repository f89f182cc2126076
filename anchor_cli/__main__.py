"""
Module execution entry point.

Allows running with: python -m anchor_cli
"""

import sys
from anchor_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
