"""Thin wrapper for the entry point. Use: python -m teams_adaptor"""

import sys

from teams_adaptor.main import main

if __name__ == "__main__":
    sys.exit(main())
