"""Run with python -m zeroex_swap."""

import sys

from zeroex_swap.main import main

if __name__ == "__main__":
    sys.exit(main())
