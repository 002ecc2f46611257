import sys

from ytrss.main import main

sys.exit(main())
