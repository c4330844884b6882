import sys

from clickup_bridge.main import main

sys.exit(main())
