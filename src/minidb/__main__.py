import sys

from minidb.repl import main

sys.exit(main())
