import sys

from day_planner.interfaces.cli import main

sys.exit(main())
