"""Allow ``python -m scaffoldkit``."""

from scaffoldkit.cli import main

if __name__ == "__main__":
    main()
