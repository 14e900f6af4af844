"""Allow ``python -m qcoin``."""

import sys

from qcoin.cli import main

sys.exit(main())
