"""Allow ``python -m mule_lazy_migrate``."""

from __future__ import annotations

import sys

from .cli import main

if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
