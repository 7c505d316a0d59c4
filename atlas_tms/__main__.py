import sys

from atlas_tms.cli import main

sys.exit(main())
