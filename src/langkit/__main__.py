"""Allow ``python -m langkit``."""

import sys

from langkit.cli import main

sys.exit(main())
