"""browdi — open files and URLs with a picked or remembered handler."""

__version__ = "0.1.0"
