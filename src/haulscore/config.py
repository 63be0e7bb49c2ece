"""Application configuration and economic assumptions."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EconomicAssumptions(BaseModel):
    """Rates and constants shared by the cost, pricing and bid models.

    Passed explicitly into every component so tests and callers can vary the
    economics without touching module state.
    """

    model_config = ConfigDict(frozen=True)

    # Overview (mileage/time) model
    cost_per_mile: float = Field(default=2.50, ge=0.0, description="Fuel plus wear and tear per mile.")
    cost_per_minute: float = Field(default=0.73, ge=0.0, description="Crew labor per service minute.")

    # Detailed visit model
    driver_rate_per_hour: float = Field(default=24.0, ge=0.0)
    helper_rate_per_hour: float = Field(default=20.0, ge=0.0)
    fuel_cost_per_gallon: float = Field(default=4.11, ge=0.0)
    fuel_efficiency_mpg: float = Field(default=6.0, gt=0.0)
    average_speed_mph: float = Field(default=25.0, gt=0.0)
    weeks_per_month: float = Field(default=4.33, ge=0.0)

    # RFP model
    rfp_labor_rate_per_hour: float = Field(default=85.0, ge=0.0)
    rfp_fuel_cost_per_mile: float = Field(default=0.65, ge=0.0)
    rfp_equipment_cost_per_hour: float = Field(default=25.0, ge=0.0)
    rfp_dumping_fee_per_ton: float = Field(default=45.0, ge=0.0)
    rfp_tons_per_home_per_month: float = Field(default=0.3, ge=0.0)
    rfp_trips_per_week: float = Field(default=4.0, ge=0.0)
    rfp_markup: float = Field(default=0.10, ge=0.0, description="Profit markup applied to the market rate.")

    @property
    def crew_rate_per_hour(self) -> float:
        return self.driver_rate_per_hour + self.helper_rate_per_hour


DEFAULT_ASSUMPTIONS = EconomicAssumptions()


class FleetConfig(BaseModel):
    """Size and throughput of the truck fleet used for capacity checks on new contracts."""

    model_config = ConfigDict(frozen=True)

    total_trucks: int = Field(default=3, ge=1)
    homes_per_truck_per_day: int = Field(default=600, ge=1)
    days_per_week: int = Field(default=5, ge=1, le=7)
    monthly_truck_cost: float = Field(default=8500.0, ge=0.0, description="Lease, insurance and maintenance.")
    route_speed_mph: float = Field(default=30.0, gt=0.0, description="Average suburban driving speed.")
    # Utilization above which extra trucks are required; each truck adds this much headroom
    truck_threshold_percent: float = Field(default=90.0, gt=0.0)
    percent_per_added_truck: float = Field(default=30.0, gt=0.0)

    @property
    def daily_capacity(self) -> int:
        return self.total_trucks * self.homes_per_truck_per_day


DEFAULT_FLEET = FleetConfig()


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="HAULSCORE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Haulscore Customer Economics API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level for the API process.")
    customer_file: Optional[Path] = Field(
        default=None,
        description="Dashboard CSV export used when a request does not carry its own customers.",
    )
    default_min_roi_percent: float = Field(
        default=15.0,
        description="ROI threshold applied to expansion opportunities when the caller supplies none.",
    )
    batch_max_workers: int = Field(default=8, ge=1, description="Worker threads used for batch scoring.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
