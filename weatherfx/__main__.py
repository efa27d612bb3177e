"""Allow running as ``python -m weatherfx``."""

import sys

from .cli import main

sys.exit(main())
