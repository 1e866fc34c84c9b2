import sys

from ecswipe.cli import main

sys.exit(main())
