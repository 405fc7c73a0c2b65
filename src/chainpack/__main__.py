import sys

from chainpack.cli import main


if __name__ == "__main__":
    sys.exit(main())
