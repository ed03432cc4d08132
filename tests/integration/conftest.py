"""Integration tests need a real token; skip them all without one."""

import os

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.environ.get("MONDAY_API_TOKEN"):
        return
    skip = pytest.mark.skip(reason="MONDAY_API_TOKEN not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)
