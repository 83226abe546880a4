import sys

from yial.repl import main

sys.exit(main())
