"""Allow running as python -m carousel_studio.cli."""

from .app import main

if __name__ == "__main__":
    main()
