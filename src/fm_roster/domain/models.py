"""Domain models for fm_roster — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.fm_common.enums import Role


@dataclass
class Ownership:
    """One player held by one user in one league. Unique per triple.

    ``team`` and ``role`` are recorded at acquisition so the roster caps
    never depend on the player still being listed upstream.
    """

    user_id: str
    league_id: str
    player_id: str
    team: str
    role: Role
    purchased_at: datetime | None = None
