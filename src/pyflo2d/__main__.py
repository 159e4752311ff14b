"""Allow ``python -m pyflo2d``."""

from __future__ import annotations

import sys

from pyflo2d.cli import main

sys.exit(main())
