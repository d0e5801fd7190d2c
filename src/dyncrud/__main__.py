"""Allow ``python -m dyncrud``."""

from dyncrud.cli import main

if __name__ == "__main__":
    main()
