"""Unit tests for settings validation"""

import pytest
from pydantic import ValidationError
from fintrack.config import Settings


def test_store_backend_accepts_known_backends():
    assert Settings(store_backend="sql").store_backend == "sql"
    assert Settings(store_backend="supabase").store_backend == "supabase"


def test_store_backend_rejects_typos():
    """A misspelled backend fails at startup instead of silently using SQL"""
    with pytest.raises(ValidationError):
        Settings(store_backend="supabse")
