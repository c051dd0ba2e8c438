"""Allow ``python -m wcag_reference``."""

import sys

from .cli import main

sys.exit(main())
