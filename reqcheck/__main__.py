import sys

from reqcheck.cli import main

sys.exit(main())
