"""Module entrypoint for `python -m implements.cli`.

Delegates to the CLI implementation.
"""

from .run_check import main


if __name__ == "__main__":
    main()
