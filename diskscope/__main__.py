import sys
from .cli import explore_main

if __name__ == "__main__":
    sys.exit(explore_main())
