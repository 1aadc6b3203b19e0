from __future__ import annotations

from typed_options.cli import main

raise SystemExit(main())
