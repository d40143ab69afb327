import sys

from passaudit.cli import main

sys.exit(main())
