"""Allow running reckon as ``python -m reckon``."""

from reckon.cli import main

if __name__ == "__main__":
    main()
