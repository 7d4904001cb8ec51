"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class Role(str, Enum):
    """Canonical positional role. Upstream 'bottom' / 'bot' map to ADC."""

    TOP = "top"
    JUNGLE = "jungle"
    MID = "mid"
    ADC = "adc"
    SUPPORT = "support"

    @classmethod
    def values(cls) -> list[str]:
        return [r.value for r in cls]


class OfferStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @classmethod
    def parse(cls, raw: str) -> "OfferStatus":
        """Accept the legacy 'completed' spelling of a settled offer."""
        value = raw.strip().lower()
        if value == "completed":
            return cls.ACCEPTED
        return cls(value)

    @property
    def is_terminal(self) -> bool:
        return self is not OfferStatus.PENDING


class TransactionType(str, Enum):
    PURCHASE = "PURCHASE"      # bought from the market
    SALE = "SALE"              # sold back to the market
    TRADE_BUY = "TRADE_BUY"    # buyer leg of an accepted offer
    TRADE_SELL = "TRADE_SELL"  # seller leg of an accepted offer
