"""visitmap: visitor tracking API with per-country map markers."""

__version__ = "0.1.0"
