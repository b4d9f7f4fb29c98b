import sys

from .sample import main

if __name__ == '__main__':
    sys.exit(main())
