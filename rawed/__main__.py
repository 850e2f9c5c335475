# rawed - a minimal raw-mode terminal text editor
# License: MIT

from rawed.cli import main

if __name__ == "__main__":
    main()
