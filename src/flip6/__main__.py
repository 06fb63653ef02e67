"""Allow ``python -m flip6``."""

import sys

from .cli import main

sys.exit(main())
