"""Acquisition rules for the Roster Ledger.

Each check raises the matching AppError and mutates nothing. Callers run
them against a snapshot taken inside the same transaction that writes.

Check order (first failure wins):
  1. already owned
  2. total roster size
  3. same-team count
  4. same-role count
"""

from collections.abc import Iterable, Sequence

from src.fm_common.errors import (
    AlreadyOwnedError,
    PositionCapExceededError,
    RosterFullError,
    TeamCapExceededError,
)
from src.fm_reference.domain.models import PlayerRef
from src.fm_roster.domain.models import Ownership

MAX_ROSTER_SIZE: int = 10
MAX_PLAYERS_PER_TEAM: int = 2
MAX_PLAYERS_PER_ROLE: int = 2


def check_not_owned(player_id: str, league_id: str, owned_ids: set[str]) -> None:
    if player_id in owned_ids:
        raise AlreadyOwnedError(player_id, league_id)


def check_roster_size(owned_count: int) -> None:
    """Raise RosterFullError if one more player would exceed MAX_ROSTER_SIZE."""
    if owned_count >= MAX_ROSTER_SIZE:
        raise RosterFullError(owned_count, MAX_ROSTER_SIZE)


def check_team_cap(player: PlayerRef, held: Iterable[Ownership]) -> None:
    same_team = sum(1 for o in held if o.team == player.team)
    if same_team >= MAX_PLAYERS_PER_TEAM:
        raise TeamCapExceededError(player.team, same_team, MAX_PLAYERS_PER_TEAM)


def check_role_cap(player: PlayerRef, held: Iterable[Ownership]) -> None:
    same_role = sum(1 for o in held if o.role is player.role)
    if same_role >= MAX_PLAYERS_PER_ROLE:
        raise PositionCapExceededError(player.role.value, same_role, MAX_PLAYERS_PER_ROLE)


def check_acquisition(
    player: PlayerRef,
    league_id: str,
    held: Sequence[Ownership],
) -> None:
    """Run every roster-cap rule for acquiring ``player``.

    ``held`` is every Ownership the user has in the league; the caps count
    the team and role stored on each row.
    """
    check_not_owned(player.id, league_id, {o.player_id for o in held})
    check_roster_size(len(held))
    check_team_cap(player, held)
    check_role_cap(player, held)
