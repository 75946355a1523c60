"""Allow running bumper as ``python -m bumper``."""

from bumper.cli.app import main

if __name__ == "__main__":
    main()
