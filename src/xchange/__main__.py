# src/xchange/__main__.py
"""Module entry point: ``python -m xchange``."""

from xchange.app import main

main()
