import sys

from mbkm_notifier.main import main

sys.exit(main())
