"""Configuration loading stories: bundled defaults, caching, reset, environment layer."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor

import pytest

from sparkpost_delivery.adapters.config.loader import get_config, get_default_config_path, validate_profile
from sparkpost_delivery.adapters.sparkpost.config import DEFAULT_API_HOST, load_sparkpost_config_from_dict


@pytest.mark.os_agnostic
class TestGetDefaultConfigPath:
    """Verify get_default_config_path() behavior."""

    def test_points_at_bundled_toml(self) -> None:
        result = get_default_config_path()

        assert result.name == "defaultconfig.toml"
        assert result.is_file()

    def test_repeated_calls_return_equal_paths(self) -> None:
        assert get_default_config_path() == get_default_config_path()


@pytest.mark.os_agnostic
class TestBundledDefaults:
    """The bundled file leaves SparkPost unconfigured apart from the host."""

    def test_sparkpost_section_has_default_host(self, clear_config_cache: None) -> None:
        config = get_config()

        assert config.get("sparkpost.api_host", default=None) == DEFAULT_API_HOST

    def test_bundled_api_key_is_treated_as_unset(self, clear_config_cache: None) -> None:
        settings = load_sparkpost_config_from_dict(get_config().as_dict())

        assert settings.api_key is None
        assert settings.sandbox is None

    def test_logging_section_is_present(self, clear_config_cache: None) -> None:
        assert "lib_log_rich" in get_config().as_dict()


@pytest.mark.os_agnostic
class TestCachingAndReset:
    """get_config() is cached until cache_clear() resets it."""

    def test_repeated_calls_return_the_cached_object(self, clear_config_cache: None) -> None:
        assert get_config() is get_config()

    def test_cache_clear_forces_a_fresh_read(self, clear_config_cache: None) -> None:
        first = get_config()

        get_config.cache_clear()

        assert get_config() is not first

    def test_environment_change_is_seen_only_after_reset(
        self,
        clear_config_cache: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        before = get_config()
        monkeypatch.setenv("SPARKPOST_DELIVERY___SPARKPOST__API_KEY", "env-key")

        cached = get_config()
        get_config.cache_clear()
        fresh = get_config()

        assert cached is before
        assert fresh.get("sparkpost.api_key", default=None) == "env-key"
        get_config.cache_clear()


@pytest.mark.os_agnostic
class TestProfiles:
    """Profile names are validated before any file is read."""

    def test_path_traversal_profile_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            validate_profile("../etc")

    def test_get_config_rejects_invalid_profile(self, clear_config_cache: None) -> None:
        with pytest.raises(ValueError):
            get_config(profile="../../secrets")


@pytest.mark.os_agnostic
class TestConcurrentAccess:
    """Cached loading stays consistent under concurrent access."""

    def test_concurrent_get_config_returns_equivalent_results(self, clear_config_cache: None) -> None:
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = [f.result() for f in [pool.submit(get_config) for _ in range(10)]]

        first_dict = results[0].as_dict()
        assert all(r.as_dict() == first_dict for r in results)

    def test_concurrent_access_with_cache_clear(self, clear_config_cache: None) -> None:
        """Clearing the cache while other threads read it raises nothing."""
        errors: list[Exception] = []

        def fetch_config() -> None:
            try:
                assert isinstance(get_config().as_dict(), dict)
            except Exception as exc:
                errors.append(exc)

        def clear_cache() -> None:
            try:
                get_config.cache_clear()
            except Exception as exc:
                errors.append(exc)

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures: list[Future[None]] = []
            for i in range(20):
                futures.append(pool.submit(clear_cache if i % 5 == 0 else fetch_config))
            for future in futures:
                future.result()

        assert errors == [], f"Concurrent access errors: {errors}"
