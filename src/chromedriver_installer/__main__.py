import sys

from chromedriver_installer.cli import main

sys.exit(main())
