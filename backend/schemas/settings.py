"""Data contracts for the user-settings endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from backend.models import ContributionSettings


class UserSettingsResponse(ContributionSettings):
    """Saved settings snapshot. ``id`` is absent when the defaults are served."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    id: Optional[int] = None


class SettingsSavedResponse(UserSettingsResponse):
    id: int
    message: str = "Settings updated successfully"


class ContributionDefaultsResponse(BaseModel):
    percentage: float
    fixed: float
