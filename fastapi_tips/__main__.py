import sys

from fastapi_tips.cli import main

sys.exit(main())
