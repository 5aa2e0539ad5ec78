"""CodeMaster - lesson progression for a learn-to-code course catalogue."""

__version__ = "0.1.0"
