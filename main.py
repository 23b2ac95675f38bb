"""Run clipurl from a source checkout"""

import sys

from clipurl.app import main


if __name__ == "__main__":
    sys.exit(main())
