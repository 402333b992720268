# test_imports.py
import importlib

import pytest


@pytest.mark.parametrize("module", [
    "movie_budget",
    "movie_budget.core.ledger",
    "movie_budget.core.dispatcher",
    "movie_budget.config.loader",
    "movie_budget.sdk",
    "movie_budget.cli.main",
])
def test_module_imports(module):
    assert importlib.import_module(module) is not None


def test_sdk_exports_client():
    from movie_budget.sdk import OllamaClient
    assert OllamaClient.__name__ == "OllamaClient"
