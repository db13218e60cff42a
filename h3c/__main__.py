"""Allow running the supplicant with ``python -m h3c``."""

import sys

from .cli import main

sys.exit(main())
