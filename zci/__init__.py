"""zci: release automation for built binaries."""

__version__ = "0.1.0"
