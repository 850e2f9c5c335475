# rawed - a minimal raw-mode terminal text editor
# License: MIT

__version__ = "0.1.0"
