"""kubedrift: guard against silent drift in vendored upstream config defaults."""

__version__ = "0.1.0"
