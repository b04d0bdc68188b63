"""Entry point for ``python -m arg_parser``; see :mod:`arg_parser.main`."""

from .main import main

if __name__ == "__main__":
    raise SystemExit(main())
