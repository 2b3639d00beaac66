"""
Entry point for running savepoint as a module: python -m savepoint
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
