"""Allow ``python -m remotecode``."""

from remotecode.cli.main import main

if __name__ == "__main__":
    main()
