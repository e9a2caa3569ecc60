import sys

from chunkfile.launcher import main

sys.exit(main())
