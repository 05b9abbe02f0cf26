"""Allow running as ``python -m siterank``."""

import sys

from .cli import main

sys.exit(main())
