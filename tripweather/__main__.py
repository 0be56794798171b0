import sys

from tripweather.cli import main

sys.exit(main())
