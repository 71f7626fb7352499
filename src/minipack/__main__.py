import sys

from minipack.cli import main

sys.exit(main())
