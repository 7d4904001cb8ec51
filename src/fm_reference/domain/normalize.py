"""Normalization at the provider boundary.

Upstream player payloads vary in shape (``summonerName`` vs ``name``,
``image`` vs ``profilePhotoUrl``) and spell the bottom-lane role either
"bottom" or "adc". Everything is folded into one ``PlayerRef`` here so no
downstream code needs fallback chains or role synonyms.
"""

from typing import Any

from src.fm_common.enums import Role
from src.fm_common.errors import InvalidPositionError
from src.fm_reference.domain.models import PlayerRef

_ROLE_SYNONYMS: dict[str, Role] = {
    "top": Role.TOP,
    "jungle": Role.JUNGLE,
    "jungler": Role.JUNGLE,
    "mid": Role.MID,
    "middle": Role.MID,
    "adc": Role.ADC,
    "bottom": Role.ADC,
    "bot": Role.ADC,
    "support": Role.SUPPORT,
    "utility": Role.SUPPORT,
}


def normalize_role(raw: str | None) -> Role | None:
    """Map an upstream role token to the canonical Role; None if unknown."""
    if not raw:
        return None
    return _ROLE_SYNONYMS.get(raw.strip().lower())


def parse_position(raw: str) -> Role:
    """Parse a lineup position / market filter supplied by a client.

    Raises:
        InvalidPositionError: ``raw`` is not a known role or synonym.
    """
    role = normalize_role(raw)
    if role is None:
        raise InvalidPositionError(raw, Role.values())
    return role


def display_name(raw: dict[str, Any]) -> str:
    return str(raw.get("summonerName") or raw.get("name") or "").strip()


def normalize_player(
    raw: dict[str, Any],
    team: dict[str, Any],
    price: int,
) -> PlayerRef | None:
    """Build a PlayerRef from one upstream player inside its team payload.

    Returns None for records that cannot be rostered (no id, no name, or a
    role outside the five positions, e.g. coaches).
    """
    player_id = raw.get("id")
    name = display_name(raw)
    role = normalize_role(raw.get("role"))
    if not player_id or not name or role is None:
        return None
    return PlayerRef(
        id=str(player_id),
        name=name,
        team=str(team.get("code") or ""),
        role=role,
        price=price,
        team_name=team.get("name"),
        image_url=raw.get("image") or raw.get("profilePhotoUrl"),
    )


def is_excluded(raw: dict[str, Any], excluded: frozenset[str]) -> bool:
    """Reserved identities are filtered by either display or real name."""
    return raw.get("summonerName") in excluded or raw.get("name") in excluded
