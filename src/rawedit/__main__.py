"""Allow ``python -m rawedit``."""

import sys

from rawedit.adapters.terminal.app import main

sys.exit(main())
