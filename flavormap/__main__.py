"""Allow `python -m flavormap`."""

from flavormap.cli.main import main

if __name__ == "__main__":
    main()
