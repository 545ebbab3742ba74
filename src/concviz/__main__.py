import sys

from concviz.app import main

sys.exit(main())
