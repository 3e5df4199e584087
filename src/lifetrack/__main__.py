"""Allow ``python -m lifetrack``."""

from .cli import main

if __name__ == "__main__":
    main()
