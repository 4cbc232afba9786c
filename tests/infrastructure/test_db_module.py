"""Tests for the infrastructure.db module."""

import pytest

from ledger_engine.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("ANALYTICS_DB_URL", "postgresql://example")

    assert db_module._get_env_var("ANALYTICS_DB_URL") == "postgresql://example"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("ANALYTICS_DB_URL", raising=False)

    with pytest.raises(RuntimeError):
        db_module._get_env_var("ANALYTICS_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://analytics")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://analytics"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_get_analytics_engine_caches_adapter(monkeypatch):
    """get_analytics_engine should memoize the analytics engine."""
    monkeypatch.setattr(db_module, "_analytics_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("ANALYTICS_DB_URL", "postgresql://analytics")

    engine_one = db_module.get_analytics_engine()
    engine_two = db_module.get_analytics_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://analytics"
    assert created == ["postgresql://analytics"]


def test_adapter_returns_module_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the module helper."""
    monkeypatch.setattr(
        db_module,
        "get_analytics_engine",
        lambda: "analytics_engine",
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_analytics_engine() == "analytics_engine"


def test_adapter_prefers_explicit_engine(monkeypatch):
    """An engine passed to the adapter should bypass the environment."""
    monkeypatch.setattr(
        db_module,
        "get_analytics_engine",
        lambda: pytest.fail("module engine should not be used"),
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter(engine="explicit")

    assert adapter.get_analytics_engine() == "explicit"
