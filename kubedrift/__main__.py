"""Entry point for `python -m kubedrift`.

Usage:
    python -m kubedrift check
    uv run python -m kubedrift show kubelet
"""

from __future__ import annotations

from kubedrift.cli.main import cli

cli()
