"""Module entrypoint for ``python -m etree``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and output happen in ``etree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
