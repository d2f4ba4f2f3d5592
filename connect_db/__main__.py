"""Entry point for python -m connect_db."""

import sys

from connect_db.cli import main

sys.exit(main())
