from __future__ import annotations

from bfvm.main import main

raise SystemExit(main())
