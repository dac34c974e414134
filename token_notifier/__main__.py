"""
Token Notifier - Main entry point.
"""

import sys

from token_notifier.cli import main

if __name__ == "__main__":
    sys.exit(main())
