"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth / league membership
  2xxx: Budget
  3xxx: Reference data
  4xxx: Roster
  5xxx: Lineup
  6xxx: Offer
  9xxx: System

Every error carries ``details``: the violated rule and the quantities
involved, so a client can render an actionable message.
"""

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details: dict[str, Any] = details or {}
        super().__init__(message)


# --- 1xxx: Auth / league membership ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class NotParticipantError(AppError):
    def __init__(self, user_id: str, league_id: str) -> None:
        super().__init__(
            1101,
            f"User {user_id} is not a participant of league {league_id}",
            403,
            {"user_id": user_id, "league_id": league_id},
        )


class AlreadyParticipantError(AppError):
    def __init__(self, user_id: str, league_id: str) -> None:
        super().__init__(
            1102,
            f"User {user_id} already joined league {league_id}",
            409,
            {"user_id": user_id, "league_id": league_id},
        )


# --- 2xxx: Budget ---

class InsufficientFundsError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient funds: required {required}M, available {available}M",
            422,
            {"required": required, "available": available},
        )


class BudgetAccountNotFoundError(AppError):
    def __init__(self, user_id: str, league_id: str) -> None:
        super().__init__(
            2002,
            f"Budget account not found for user {user_id} in league {league_id}",
            404,
            {"user_id": user_id, "league_id": league_id},
        )


# --- 3xxx: Reference data ---

class PlayerNotFoundError(AppError):
    def __init__(self, player_id: str) -> None:
        super().__init__(3001, f"Player not found: {player_id}", 404, {"player_id": player_id})


class InvalidPositionError(AppError):
    def __init__(self, position: str, valid: list[str]) -> None:
        super().__init__(
            3002,
            f"Invalid position '{position}'. Valid positions are: {', '.join(valid)}",
            422,
            {"position": position, "valid_positions": valid},
        )


class ReferenceProviderError(AppError):
    """Upstream reference data is unreachable or malformed. Not recoverable."""

    def __init__(self, detail: str) -> None:
        super().__init__(3003, f"Reference data provider failure: {detail}", 502)


# --- 4xxx: Roster ---

class AlreadyOwnedError(AppError):
    def __init__(self, player_id: str, league_id: str) -> None:
        super().__init__(
            4001,
            f"Player {player_id} is already owned in league {league_id}",
            409,
            {"player_id": player_id, "league_id": league_id},
        )


class RosterFullError(AppError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            4002,
            f"Roster full: {count} of {limit} players. Sell a player before buying a new one",
            422,
            {"count": count, "limit": limit},
        )


class TeamCapExceededError(AppError):
    def __init__(self, team: str, count: int, limit: int) -> None:
        super().__init__(
            4003,
            f"Team cap reached: already {count} players from {team} (max {limit})",
            422,
            {"team": team, "count": count, "limit": limit},
        )


class PositionCapExceededError(AppError):
    def __init__(self, role: str, count: int, limit: int) -> None:
        super().__init__(
            4004,
            f"Position cap reached: already {count} players for {role} (max {limit})",
            422,
            {"role": role, "count": count, "limit": limit},
        )


class NotOwnedError(AppError):
    def __init__(self, user_id: str, player_id: str, league_id: str) -> None:
        super().__init__(
            4005,
            f"User {user_id} does not own player {player_id} in league {league_id}",
            422,
            {"user_id": user_id, "player_id": player_id, "league_id": league_id},
        )


# --- 5xxx: Lineup ---

class PositionMismatchError(AppError):
    def __init__(self, player_id: str, role: str, position: str) -> None:
        super().__init__(
            5001,
            f"Player {player_id} is a {role}, not a {position}",
            422,
            {"player_id": player_id, "role": role, "position": position},
        )


# --- 6xxx: Offer ---

class OfferNotFoundError(AppError):
    def __init__(self, offer_id: str) -> None:
        super().__init__(6001, f"Offer not found: {offer_id}", 404, {"offer_id": offer_id})


class NotAuthorizedForOfferError(AppError):
    def __init__(self, offer_id: str, user_id: str, action: str) -> None:
        super().__init__(
            6002,
            f"User {user_id} may not {action} offer {offer_id}",
            403,
            {"offer_id": offer_id, "user_id": user_id, "action": action},
        )


class SellerNoLongerOwnsError(AppError):
    def __init__(self, offer_id: str, seller_user_id: str, player_id: str) -> None:
        super().__init__(
            6003,
            f"Seller {seller_user_id} no longer owns player {player_id}",
            409,
            {"offer_id": offer_id, "seller_user_id": seller_user_id, "player_id": player_id},
        )


class OfferExpiredError(AppError):
    def __init__(self, offer_id: str, expires_at: str) -> None:
        super().__init__(
            6004,
            f"Offer {offer_id} expired at {expires_at}",
            410,
            {"offer_id": offer_id, "expires_at": expires_at},
        )


class OfferNotPendingError(AppError):
    def __init__(self, offer_id: str, status: str) -> None:
        super().__init__(
            6005,
            f"Offer {offer_id} in status {status} is no longer pending",
            409,
            {"offer_id": offer_id, "status": status},
        )


class InvalidOfferError(AppError):
    def __init__(self, detail: str, details: dict[str, Any]) -> None:
        super().__init__(6006, f"Invalid offer: {detail}", 422, details)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
