# src/fxrates/__main__.py
"""Module entry point: ``python -m fxrates``."""

from fxrates.app import main

if __name__ == "__main__":
    main()
