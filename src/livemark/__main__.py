"""Allow running livemark as a module."""

import sys

from livemark.cli import main


sys.exit(main())
