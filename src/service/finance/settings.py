"""
Finance Settings for the Livrili finance module.

Configurable parameters for credit checks, overdue handling, late fees
and risk scoring. The pure calculation functions keep their documented
defaults in their signatures; FinanceService reads these settings and
passes them through explicitly.

Environment variables use the FINANCE_ prefix:
    FINANCE_CREDIT_BUFFER_PERCENTAGE=5
    FINANCE_GRACE_PERIOD_DAYS=30
    FINANCE_DAILY_LATE_FEE_RATE=0.001

Usage:
    from src.service.finance.settings import finance_settings

    grace = finance_settings.grace_period_days

    # Or create custom settings for testing
    custom = FinanceSettings(grace_period_days=15)
"""

import json
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FinanceSettings(BaseSettings):
    """
    Configurable parameters for the finance calculations.

    All settings can be overridden via environment variables with FINANCE_ prefix.
    Monetary values are in the retailer's currency units (DZD by default).
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Credit Checks ===
    credit_buffer_percentage: float = Field(
        default=5.0,
        ge=0.0,
        le=100.0,
        description="Share of the credit limit held back from purchases",
    )

    # === Overdue Handling ===
    grace_period_days: int = Field(
        default=30,
        ge=0,
        description="Days after the due date before a receivable counts as overdue",
    )
    critical_offset_days: int = Field(
        default=30,
        ge=0,
        description="Days beyond the grace period at which overdue becomes critical",
    )

    # === Late Fees ===
    daily_late_fee_rate: float = Field(
        default=0.001,
        ge=0.0,
        description="Late fee accrued per day as a fraction of the outstanding amount",
    )
    max_late_fee_percentage: float = Field(
        default=10.0,
        ge=0.0,
        description="Cap on accrued late fees as a percentage of the outstanding amount",
    )

    # === Payment Plans ===
    allow_overpayment: bool = Field(
        default=True,
        description="Accept payments larger than the outstanding balance",
    )
    plan_interest_rate: float = Field(
        default=0.0,
        ge=0.0,
        description="Annual interest rate (percent) applied to payment plans",
    )

    # === Display ===
    currency: str = Field(
        default="DZD",
        min_length=3,
        max_length=3,
        description="ISO 4217 currency code used for display",
    )
    currency_locale: str = Field(
        default="ar_DZ",
        description="Locale used to format currency amounts",
    )

    # === Risk Levels ===
    risk_high_threshold: int = Field(
        default=60,
        ge=0,
        le=100,
        description="Risk score at or above this is high risk",
    )
    risk_medium_threshold: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Risk score at or above this (and below high) is medium risk",
    )

    # === Cash Reconciliation ===
    reconciliation_tolerance: float = Field(
        default=0.01,
        ge=0.0,
        description="Absolute discrepancy below which a cash count is balanced",
    )

    # === Aging Buckets ===
    aging_bucket_edges_json: str = Field(
        default="[30,60,90]",
        description="Upper day bounds of the current, 30 and 60 day buckets as JSON",
    )

    @field_validator("aging_bucket_edges_json")
    @classmethod
    def validate_bucket_edges_json(cls, v: str) -> str:
        """Validate that bucket edges are three ascending non-negative integers."""
        try:
            edges = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(edges, list) or len(edges) != 3:
            raise ValueError("Bucket edges must be a list of three day counts")
        if not all(isinstance(x, int) and x >= 0 for x in edges):
            raise ValueError("Bucket edges must be non-negative integers")
        if not edges[0] < edges[1] < edges[2]:
            raise ValueError(f"Bucket edges must be ascending: {edges}")
        return v

    @model_validator(mode="after")
    def validate_risk_thresholds(self) -> "FinanceSettings":
        if self.risk_medium_threshold >= self.risk_high_threshold:
            raise ValueError(
                f"risk_medium_threshold ({self.risk_medium_threshold}) must be "
                f"below risk_high_threshold ({self.risk_high_threshold})"
            )
        return self

    @property
    def aging_bucket_edges(self) -> List[int]:
        """Upper bounds (inclusive, in days) of the first three aging buckets."""
        return json.loads(self.aging_bucket_edges_json)


@lru_cache
def get_finance_settings() -> FinanceSettings:
    """Get cached finance settings instance."""
    return FinanceSettings()


finance_settings = get_finance_settings()
