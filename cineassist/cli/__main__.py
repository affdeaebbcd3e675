"""Allow ``python -m cineassist.cli`` execution."""

import sys

from cineassist.cli.ask import main

sys.exit(main())
