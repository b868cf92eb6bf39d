import sys

from mongo_bootstrap.main import main

if __name__ == "__main__":
    sys.exit(main())
