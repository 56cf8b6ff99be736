# Entry point for python -m mcpget
import sys

from mcpget.cli import main

sys.exit(main())
