"""
Unit Tests for FinanceSettings validation and environment overrides.
"""

import pytest
from pydantic import ValidationError

from src.service.finance.settings import FinanceSettings


class TestFinanceSettings:
    """Tests for FinanceSettings."""

    def test_defaults(self):
        settings = FinanceSettings()

        assert settings.credit_buffer_percentage == 5.0
        assert settings.grace_period_days == 30
        assert settings.daily_late_fee_rate == 0.001
        assert settings.max_late_fee_percentage == 10.0
        assert settings.currency == "DZD"
        assert settings.aging_bucket_edges == [30, 60, 90]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FINANCE_GRACE_PERIOD_DAYS", "15")
        monkeypatch.setenv("FINANCE_CURRENCY", "EUR")

        settings = FinanceSettings()

        assert settings.grace_period_days == 15
        assert settings.currency == "EUR"

    def test_medium_threshold_must_be_below_high(self):
        with pytest.raises(ValidationError):
            FinanceSettings(risk_medium_threshold=70, risk_high_threshold=60)

    @pytest.mark.parametrize(
        "edges",
        ["[60,30,90]", "[30,60]", "[30,60,\"x\"]", "not json", "[-1,30,60]"],
    )
    def test_invalid_bucket_edges(self, edges):
        with pytest.raises(ValidationError):
            FinanceSettings(aging_bucket_edges_json=edges)

    def test_buffer_percentage_bounds(self):
        with pytest.raises(ValidationError):
            FinanceSettings(credit_buffer_percentage=150)
