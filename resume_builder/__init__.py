"""Resume Builder - guided build track plus a scored, rendered resume draft."""

__version__ = "0.1.0"
