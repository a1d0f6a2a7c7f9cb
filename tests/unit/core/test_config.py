"""Settings sections and environment overrides."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from parrotwings.core.config import SecuritySettings, Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.api_prefix == "/api"
        assert settings.database_url.startswith("sqlite+aiosqlite")
        assert settings.ledger.starting_balance == Decimal("500.00")
        assert settings.ledger.max_attempts >= 1
        assert settings.algorithm == "HS256"

    def test_nested_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SECURITY__ACCESS_TOKEN_EXPIRE_MINUTES", "30")
        monkeypatch.setenv("LEDGER__STARTING_BALANCE", "250.00")
        monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./other.db")

        settings = Settings(_env_file=None)

        assert settings.access_token_expire_minutes == 30
        assert settings.ledger.starting_balance == Decimal("250.00")
        assert settings.database_url == "sqlite+aiosqlite:///./other.db"

    def test_refresh_token_entropy_floor(self) -> None:
        with pytest.raises(ValidationError):
            SecuritySettings(refresh_token_bytes=16)
