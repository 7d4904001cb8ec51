"""Tests for domain dataclasses and the offer rules."""

from datetime import UTC, datetime, timedelta

import pytest

from src.fm_budget.domain.models import BudgetAccount, TransactionEntry
from src.fm_common.enums import OfferStatus, Role, TransactionType
from src.fm_common.errors import (
    InvalidOfferError,
    NotAuthorizedForOfferError,
    OfferNotPendingError,
)
from src.fm_offer.domain.models import Offer
from src.fm_offer.domain.rules import (
    check_can_accept,
    check_can_reject,
    check_new_offer,
    check_pending,
)
from src.fm_reference.domain.models import PlayerRef

T0 = datetime(2026, 3, 1, tzinfo=UTC)


def _offer(status: OfferStatus = OfferStatus.PENDING) -> Offer:
    return Offer(
        id="of_1",
        league_id="league-1",
        player_id="g2-mid",
        seller_user_id="alice",
        buyer_user_id="bob",
        price=10,
        status=status,
        created_at=T0,
        expires_at=T0 + timedelta(hours=48),
    )


class TestBudgetAccount:
    def test_can_afford(self) -> None:
        account = BudgetAccount("alice", "league-1", 10)
        assert account.can_afford(10)
        assert not account.can_afford(11)
        assert not account.can_afford(-1)


def test_transaction_entry_snapshots_player() -> None:
    player = PlayerRef(id="g2-mid", name="Caps", team="G2", role=Role.MID, price=9)
    entry = TransactionEntry.for_player(
        TransactionType.TRADE_BUY, "league-1", "bob", player, amount=-10, balance_after=65,
        counterparty_user_id="alice", reference_id="of_1",
    )
    assert entry.entry_type == "TRADE_BUY"
    assert (entry.player_name, entry.player_team, entry.player_role) == ("Caps", "G2", "mid")
    assert entry.counterparty_user_id == "alice"
    assert entry.id is None


class TestOffer:
    def test_overdue_strictly_after_deadline(self) -> None:
        offer = _offer()
        assert not offer.is_overdue(T0 + timedelta(hours=48))
        assert offer.is_overdue(T0 + timedelta(hours=48, seconds=1))

    def test_terminal_offer_never_overdue(self) -> None:
        assert not _offer(OfferStatus.REJECTED).is_overdue(T0 + timedelta(days=10))

    def test_involves(self) -> None:
        offer = _offer()
        assert offer.involves("alice") and offer.involves("bob")
        assert not offer.involves("mallory")


class TestOfferRules:
    def test_new_offer_ok(self) -> None:
        check_new_offer("alice", "bob", 1)

    def test_self_offer(self) -> None:
        with pytest.raises(InvalidOfferError) as exc_info:
            check_new_offer("alice", "alice", 10)
        assert exc_info.value.details == {"seller_user_id": "alice", "buyer_user_id": "alice"}

    @pytest.mark.parametrize("price", [0, -5])
    def test_non_positive_price(self, price: int) -> None:
        with pytest.raises(InvalidOfferError) as exc_info:
            check_new_offer("alice", "bob", price)
        assert exc_info.value.details == {"price": price, "min_price": 1}

    def test_accept_only_buyer(self) -> None:
        check_can_accept(_offer(), "bob")
        with pytest.raises(NotAuthorizedForOfferError):
            check_can_accept(_offer(), "alice")

    def test_reject_either_party(self) -> None:
        check_can_reject(_offer(), "alice")
        check_can_reject(_offer(), "bob")
        with pytest.raises(NotAuthorizedForOfferError):
            check_can_reject(_offer(), "mallory")

    @pytest.mark.parametrize(
        "status", [OfferStatus.ACCEPTED, OfferStatus.REJECTED, OfferStatus.EXPIRED]
    )
    def test_terminal_not_pending(self, status: OfferStatus) -> None:
        with pytest.raises(OfferNotPendingError):
            check_pending(_offer(status))
