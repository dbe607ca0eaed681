"""Unit tests for settings, legacy configuration resolution, and id normalization."""

from unittest.mock import patch

import pytest

from recruitment_api.config.settings import Settings
from recruitment_api.services.candidates import (
    DEFAULT_LEGACY_API_URL,
    CandidateServiceConfig,
    build_legacy_endpoint,
    normalize_job_offer_ids,
    resolve_legacy_api_details,
)


def _settings(**overrides) -> Settings:
    values = {"API_KEY": None, "LEGACY_API_KEY": None, "LEGACY_API_URL": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings:
    def test_settings_defaults(self) -> None:
        s = _settings()
        assert s.DATABASE_URL.startswith("sqlite")
        assert s.LEGACY_API_TIMEOUT == 10.0
        assert s.LOG_LEVEL == "INFO"

    def test_settings_loads_from_environment(self) -> None:
        env_overrides = {
            "API_KEY": "inbound",
            "LEGACY_API_URL": "http://legacy.example.com",
            "LEGACY_API_TIMEOUT": "2.5",
        }
        with patch.dict("os.environ", env_overrides, clear=False):
            s = Settings(_env_file=None)
            assert s.API_KEY == "inbound"
            assert s.LEGACY_API_URL == "http://legacy.example.com"
            assert s.LEGACY_API_TIMEOUT == 2.5


class TestResolveLegacyApiDetails:
    def test_defaults_when_nothing_configured(self) -> None:
        details = resolve_legacy_api_details(CandidateServiceConfig(), _settings())
        assert details.api_url == DEFAULT_LEGACY_API_URL
        assert details.api_key is None

    def test_service_overrides_win(self) -> None:
        config = CandidateServiceConfig(
            expected_api_key="inbound-override",
            legacy_api_key="legacy-override",
            legacy_api_url="http://override.example.com",
        )
        settings = _settings(
            API_KEY="inbound",
            LEGACY_API_KEY="legacy",
            LEGACY_API_URL="http://settings.example.com",
        )

        details = resolve_legacy_api_details(config, settings)

        assert details.api_key == "legacy-override"
        assert details.api_url == "http://override.example.com"

    def test_key_falls_back_to_inbound_override(self) -> None:
        config = CandidateServiceConfig(expected_api_key="inbound-override")
        details = resolve_legacy_api_details(config, _settings(LEGACY_API_KEY="legacy"))
        assert details.api_key == "inbound-override"

    def test_key_falls_back_to_shared_legacy_key(self) -> None:
        details = resolve_legacy_api_details(
            CandidateServiceConfig(),
            _settings(API_KEY="inbound", LEGACY_API_KEY="legacy"),
        )
        assert details.api_key == "legacy"

    def test_key_falls_back_to_inbound_key(self) -> None:
        details = resolve_legacy_api_details(CandidateServiceConfig(), _settings(API_KEY="inbound"))
        assert details.api_key == "inbound"

    def test_url_falls_back_to_settings(self) -> None:
        details = resolve_legacy_api_details(
            CandidateServiceConfig(),
            _settings(LEGACY_API_URL="http://settings.example.com"),
        )
        assert details.api_url == "http://settings.example.com"


class TestBuildLegacyEndpoint:
    @pytest.mark.parametrize(
        "base, expected",
        [
            ("http://localhost:4040", "http://localhost:4040/candidates"),
            ("https://legacy.example.com/api/v1", "https://legacy.example.com/candidates"),
            ("http://legacy.example.com/", "http://legacy.example.com/candidates"),
        ],
    )
    def test_valid_urls(self, base, expected) -> None:
        assert build_legacy_endpoint(base) == expected

    @pytest.mark.parametrize("base", ["not a url", "", "ftp://legacy.example.com", "http://"])
    def test_invalid_urls(self, base) -> None:
        assert build_legacy_endpoint(base) is None


class TestNormalizeJobOfferIds:
    def test_dedupes_preserving_first_occurrence(self) -> None:
        assert normalize_job_offer_ids([2, 1, 2, 1]) == [2, 1]

    def test_coerces_integral_values(self) -> None:
        assert normalize_job_offer_ids(["3", 4.0, " 5 "]) == [3, 4, 5]

    def test_drops_non_positive_and_non_integer(self) -> None:
        assert normalize_job_offer_ids([0, -3, 1.5, "x", None, True, [1], 7]) == [7]

    def test_none_is_empty(self) -> None:
        assert normalize_job_offer_ids(None) == []
