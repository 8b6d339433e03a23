import sys

from ftldoc.cli import main

sys.exit(main())
