"""Tests for fm_common.enums."""

import pytest

from src.fm_common.enums import OfferStatus, Role, TransactionType


class TestRole:
    def test_canonical_values(self) -> None:
        assert Role.values() == ["top", "jungle", "mid", "adc", "support"]

    def test_str_enum(self) -> None:
        assert Role.ADC == "adc"


class TestOfferStatus:
    def test_completed_is_accepted(self) -> None:
        assert OfferStatus.parse("completed") is OfferStatus.ACCEPTED
        assert OfferStatus.parse(" Completed ") is OfferStatus.ACCEPTED

    def test_parse_canonical(self) -> None:
        assert OfferStatus.parse("pending") is OfferStatus.PENDING

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(ValueError):
            OfferStatus.parse("cancelled")

    def test_terminal(self) -> None:
        assert not OfferStatus.PENDING.is_terminal
        assert OfferStatus.ACCEPTED.is_terminal
        assert OfferStatus.REJECTED.is_terminal
        assert OfferStatus.EXPIRED.is_terminal


def test_transaction_types() -> None:
    assert {t.value for t in TransactionType} == {
        "PURCHASE",
        "SALE",
        "TRADE_BUY",
        "TRADE_SELL",
    }
