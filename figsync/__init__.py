"""figsync: keep Figma frame screenshots and specs in sync with docs."""

__version__ = "0.1.0"
