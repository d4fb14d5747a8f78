"""
Module execution entry point.

Allows running with: python -m reserve_cli
"""

import sys
from reserve_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
