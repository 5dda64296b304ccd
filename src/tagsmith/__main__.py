"""Allow ``python -m tagsmith``."""

import sys

from tagsmith.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
