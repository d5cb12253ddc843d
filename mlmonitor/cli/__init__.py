"""Command-line tools for mlmonitor.

- ``python -m mlmonitor.cli init-db`` - create the SQLite schema
- ``python -m mlmonitor.cli demo``    - record a sample inference + feedback
- ``python -m mlmonitor.cli serve``   - run the HTTP API

All commands use argparse and read the same config/.env/environment layers
as the server.
"""
