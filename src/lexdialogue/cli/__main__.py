"""Main entry point for lexdialogue CLI when run as a module."""

from lexdialogue.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
