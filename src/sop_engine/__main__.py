import sys

from sop_engine.cli import main

sys.exit(main())
