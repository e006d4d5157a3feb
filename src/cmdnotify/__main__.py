import sys

from cmdnotify.cli import main

sys.exit(main())
