"""Command-line interface."""
from forceplateviz.main import main

if __name__ == "__main__":
    main()
