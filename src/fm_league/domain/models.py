"""Domain models for fm_league — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class LeagueMember:
    league_id: str
    user_id: str
    joined_at: datetime | None = None
