"""Allow ``python -m plc``."""

from plc.cli import main

raise SystemExit(main())
