import sys

from filesplit.cli import main

sys.exit(main())
