"""Allow ``python -m turbomd``."""

from turbomd.cli import main

raise SystemExit(main())
