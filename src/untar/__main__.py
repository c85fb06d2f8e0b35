"""Allow ``python -m untar``."""

from __future__ import annotations

__author__ = "Artur Barseghyan <artur.barseghyan@gmail.com>"
__copyright__ = "2026 Artur Barseghyan"
__license__ = "MIT"

import sys

from untar._cli import main

if __name__ == "__main__":
    sys.exit(main())
