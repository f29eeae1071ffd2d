"""Allow ``python -m evtail``."""

from .cli import main

if __name__ == "__main__":
    main()
