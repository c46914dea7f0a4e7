"""Allow ``python -m eden``."""

from eden.cli import main

if __name__ == "__main__":
    main()
