"""Allow ``python -m objperms``."""

from __future__ import annotations

from objperms.cli.main import main

raise SystemExit(main())
