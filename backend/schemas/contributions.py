"""Data contracts for the contribution history endpoint."""

from typing import List

from pydantic import BaseModel

from backend.models import ContributionHistoryEntry


class YtdContributionsResponse(BaseModel):
    contributions: List[ContributionHistoryEntry]
    totalYTD: float
