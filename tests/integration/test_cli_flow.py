import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock
from pathlib import Path

from vidproxy import main
from vidproxy.main import app
from vidproxy.domain.events.cache_events import BackendOperationPerformed, CacheHit
from vidproxy.infrastructure.cache.caching_proxy import CachingVideoServiceProxy, InvalidationPolicy
from vidproxy.infrastructure.config import settings

# These fixtures are defined in tests/conftest.py:
# runner: CliRunner
# catalog_file: Path (small YAML catalog)
# isolated_config: autouse, keeps user configuration out of the tests

@pytest.fixture(autouse=True)
def keep_root_logger(mocker):
    """setup_logging replaces root handlers; leave pytest's handlers alone."""
    return mocker.patch("vidproxy.main.setup_logging")

@pytest.fixture
def deps_spy(mocker) -> MagicMock:
    """Spies on the composition root so tests can inspect the wired objects."""
    return mocker.spy(main, "create_dependencies")

def test_info_command_flow(runner: CliRunner, deps_spy: MagicMock):
    result = runner.invoke(app, ["info", "42"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    assert "Demo" in result.output
    assert "0:42" in result.output
    assert "hits" in result.output
    assert isinstance(deps_spy.spy_return["cache_proxy"], CachingVideoServiceProxy)

def test_repeated_info_served_from_cache(runner: CliRunner, deps_spy: MagicMock):
    result = runner.invoke(app, ["info", "42", "--repeat", "3"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    deps = deps_spy.spy_return
    stats = deps["cache_proxy"].stats()
    assert stats.hits == 2
    assert stats.delegate_calls == 1
    assert len(deps["event_recorder"].of_type(BackendOperationPerformed)) == 1
    assert len(deps["event_recorder"].of_type(CacheHit)) == 2

def test_no_cache_binds_consumer_to_backend(runner: CliRunner, deps_spy: MagicMock):
    result = runner.invoke(app, ["--no-cache", "download", "42", "--repeat", "3"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    deps = deps_spy.spy_return
    assert deps["cache_proxy"] is None
    assert deps["video_service"] is deps["backend"]
    assert len(deps["event_recorder"].of_type(BackendOperationPerformed)) == 3
    assert "512 bytes" in result.output

def test_cache_can_be_disabled_by_environment(runner: CliRunner, deps_spy: MagicMock, monkeypatch):
    monkeypatch.setenv("VIDPROXY_CACHE_ENABLED", "false")
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    assert deps_spy.spy_return["cache_proxy"] is None

def test_list_command_flow(runner: CliRunner):
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    assert "Introduction to Proxies" in result.output
    assert "lazy-init" in result.output

def test_unknown_video_exits_with_error(runner: CliRunner):
    result = runner.invoke(app, ["info", "missing"])

    assert result.exit_code == 1
    assert "Video not found: missing" in result.output

def test_demo_with_sticky_policy(runner: CliRunner, deps_spy: MagicMock):
    result = runner.invoke(app, ["--policy", "sticky", "demo", "42"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    proxy = deps_spy.spy_return["cache_proxy"]
    assert proxy.policy is InvalidationPolicy.STICKY
    assert proxy.stats().misses == 2
    assert proxy.invalidate_all is True

def test_demo_with_default_policy(runner: CliRunner, deps_spy: MagicMock):
    result = runner.invoke(app, ["demo"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    proxy = deps_spy.spy_return["cache_proxy"]
    assert proxy.policy is InvalidationPolicy.SINGLE_SHOT
    assert proxy.invalidate_all is False
    assert proxy.refresh_pending is False
    assert "force_refresh() called" in result.output

def test_catalog_file_from_config(runner: CliRunner, catalog_file: Path):
    settings.set_config_for_testing({"service.catalog_file": str(catalog_file)})
    result = runner.invoke(app, ["info", "alpha"])

    assert result.exit_code == 0, f"CLI command failed: {result.output}"
    assert "Alpha Video" in result.output
    assert "1:02:05" in result.output

def test_broken_catalog_file_exits(runner: CliRunner, tmp_path: Path):
    broken = tmp_path / "broken.yaml"
    broken.write_text("videos: nope\n", encoding="utf-8")
    settings.set_config_for_testing({"service.catalog_file": str(broken)})

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 1
    assert "Failed to load catalog" in result.output
