"""Module entrypoint for `python -m trapviz`."""

from __future__ import annotations

from .cli.app import console_main

if __name__ == "__main__":
    console_main()
