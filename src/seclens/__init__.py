"""seclens: AI-assisted security analysis toolkit."""

__version__ = "0.1.0"
