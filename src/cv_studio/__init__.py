"""CV rendering and export pipeline."""

__version__ = "0.1.0"
