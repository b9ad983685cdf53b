"""Allow ``python -m hiddenfield``."""

import sys

from hiddenfield.main import main

sys.exit(main())
