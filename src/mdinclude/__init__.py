"""Keep fenced code samples in Markdown documents in sync with their source files."""

__version__ = "0.1.0"
