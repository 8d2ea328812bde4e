"""readmegen: turn free-form text and GitHub references into README markdown."""

__version__ = "0.1.0"
