"""Allow ``python -m tube_u`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m tube_u`` behaves identically to the ``tube-u``
console script.
"""

from __future__ import annotations

from tube_u.cli.app import cli

if __name__ == "__main__":
    cli()
