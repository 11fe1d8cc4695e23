import sys

from regen.run_regen import main

sys.exit(main())
