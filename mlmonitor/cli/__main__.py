"""Allow ``python -m mlmonitor.cli`` execution."""

import sys

from mlmonitor.cli.manage import main

sys.exit(main())
