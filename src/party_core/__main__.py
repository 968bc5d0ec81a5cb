"""Allow running as: python -m party_core"""

import sys

from .cli import main

sys.exit(main())
