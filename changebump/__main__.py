import sys

from changebump.cli.main import main

sys.exit(main())
