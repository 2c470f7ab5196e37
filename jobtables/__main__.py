"""Allow running as: python -m jobtables"""

import sys

from jobtables.cli import main

if __name__ == "__main__":
    sys.exit(main())
