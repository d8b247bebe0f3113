"""
Analytics Settings for the fintrack dashboard.

Thresholds used by the budget bands, savings tips and time windows.
Environment variables use the ANALYTICS_ prefix:
    ANALYTICS_TRAILING_MONTHS=12
    ANALYTICS_BUDGET_WARNING_PCT=75

Usage:
    from fintrack.service.analytics.settings import analytics_settings

    # Or create custom settings for testing
    custom = AnalyticsSettings(trailing_months=3)
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyticsSettings(BaseSettings):
    """
    Configurable parameters for derived dashboard views.

    Percentages are expressed on a 0-100 scale.
    """

    model_config = SettingsConfigDict(
        env_prefix="ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Time Windows ===
    trailing_months: int = Field(
        default=6,
        ge=1,
        le=24,
        description="Number of calendar months in the monthly series (current included)",
    )
    week_days: int = Field(
        default=7,
        ge=1,
        description="Length in days of the 'week' period filter",
    )

    # === Budget Bands ===
    budget_exceeded_pct: float = Field(
        default=100.0,
        gt=0.0,
        description="Consumption at or above this is 'exceeded'",
    )
    budget_warning_pct: float = Field(
        default=80.0,
        gt=0.0,
        description="Consumption at or above this is 'warning'",
    )
    budget_midway_pct: float = Field(
        default=50.0,
        gt=0.0,
        description="Consumption at or above this is 'midway'",
    )

    # === Savings Rate Tiers ===
    savings_excellent_rate: float = Field(
        default=30.0,
        description="Savings rate at or above this earns the 'excellent' tip",
    )
    savings_good_rate: float = Field(
        default=20.0,
        description="Savings rate at or above this earns the 'good' tip",
    )
    savings_fair_rate: float = Field(
        default=10.0,
        description="Savings rate at or above this earns the 'not bad' tip",
    )

    @model_validator(mode="after")
    def validate_ordering(self) -> "AnalyticsSettings":
        """Bands and tiers must be strictly descending."""
        if not (
            self.budget_exceeded_pct > self.budget_warning_pct > self.budget_midway_pct
        ):
            raise ValueError("Budget bands must satisfy exceeded > warning > midway")
        if not (
            self.savings_excellent_rate > self.savings_good_rate > self.savings_fair_rate
        ):
            raise ValueError("Savings tiers must satisfy excellent > good > fair")
        return self


@lru_cache
def get_analytics_settings() -> AnalyticsSettings:
    """Get cached analytics settings instance."""
    return AnalyticsSettings()


analytics_settings = get_analytics_settings()
