"""Entry point for ``python -m svextract``."""

import sys

from svextract.cli import main

sys.exit(main())
