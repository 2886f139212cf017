"""Integration tests need a migrated PostgreSQL database.

Point DATABASE__URL at a reachable PostgreSQL server, run
`python scripts/run_migrations.py`, then run the suite with INTEGRATION=1.
"""

import os

import pytest


def pytest_collection_modifyitems(config, items):
    if os.environ.get("INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set INTEGRATION=1 to run against PostgreSQL")
    for item in items:
        if "tests/integration" in str(item.fspath).replace(os.sep, "/"):
            item.add_marker(skip)
