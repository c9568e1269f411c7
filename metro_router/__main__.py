"""Allow ``python -m metro_router``."""

import sys

from .cli import main

sys.exit(main())
