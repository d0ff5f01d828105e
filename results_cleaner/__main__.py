import sys

from results_cleaner.main import main

sys.exit(main())
