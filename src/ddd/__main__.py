"""Allow ``python -m ddd`` (used by the generated git hook scripts)."""

import sys

from ddd.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
