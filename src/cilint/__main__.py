"""Entry point for ``python -m cilint``."""

from cilint.cli import main

if __name__ == "__main__":
    main()
