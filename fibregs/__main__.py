import sys

from fibregs.cli import main

sys.exit(main())
