"""CLI entry point for galerie.cli module.

Enables execution via: python -m galerie.cli <command>
"""

from galerie.cli.manage import main

if __name__ == "__main__":
    raise SystemExit(main())
