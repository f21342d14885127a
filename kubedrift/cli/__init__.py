"""kubedrift command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``kubedrift`` script).
"""

from kubedrift.cli.main import cli

__all__ = ["cli"]
