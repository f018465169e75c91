"""UReduce URL shortening session."""

__version__ = "0.1.0"
