"""Module entrypoint for ``python -m dirpick``.

All argument parsing and session setup happen in ``dirpick.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
