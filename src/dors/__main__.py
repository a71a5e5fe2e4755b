"""Allow running Dors with ``python -m dors``."""

import sys

from dors.cli import main

if __name__ == "__main__":
	sys.exit(main())
