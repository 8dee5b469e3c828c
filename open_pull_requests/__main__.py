"""Allow running the tool with ``python -m open_pull_requests``."""

import sys

from .cli import main

sys.exit(main())
