import sys

from subsift.cli import main

sys.exit(main())
