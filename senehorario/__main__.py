"""
Package entry point.

Allows running the application via:

    python -m senehorario

This simply forwards execution to senehorario.cli.main().
"""

from senehorario.cli import main

if __name__ == "__main__":
    main()
