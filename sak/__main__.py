import sys

from sak.main import main

if __name__ == "__main__":
    sys.exit(main())
