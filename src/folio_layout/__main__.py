import sys

from folio_layout.cli import main

sys.exit(main())
