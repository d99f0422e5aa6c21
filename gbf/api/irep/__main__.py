"""
`python -m gbf.api.irep` entrypoint.

The CLI lives in `gbf/api/irep/cli.py`; this module only delegates to it.
"""

from __future__ import annotations

from . import cli


def main() -> int:
    """Delegate to `gbf.api.irep.cli.main`."""
    return cli.main()


if __name__ == "__main__":
    raise SystemExit(main())
