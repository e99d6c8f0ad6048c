"""Allow ``python -m changelog_gen``."""

from changelog_gen.cli.main import main

if __name__ == "__main__":
    main()
