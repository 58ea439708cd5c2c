from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from currency import Currency

MAX_CLIENT_ID = 0xFFFF
MAX_TRANSACTION_ID = 0xFFFFFFFF


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @classmethod
    def parse(cls, value: str) -> "TransactionType":
        """Case-insensitive lookup. Raises ValueError for unknown names."""
        return cls(value.strip().lower())

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DisputeState(Enum):
    WAITING = "waiting"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Currency] = None

    def __post_init__(self):
        if not 0 <= self.client_id <= MAX_CLIENT_ID:
            raise ValueError(f"client id {self.client_id} out of range")
        if not 0 <= self.transaction_id <= MAX_TRANSACTION_ID:
            raise ValueError(f"transaction id {self.transaction_id} out of range")
        if self.transaction_type.carries_amount and self.amount is None:
            raise ValueError(f"{self.transaction_type.value} tx {self.transaction_id} has no amount")

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    """
    Balance of a single client.
    Owns the client's deposit/withdrawal history and the dispute state of
    every transaction that was ever disputed. A missing dispute entry means
    the transaction was never disputed.
    """

    client_id: int
    available: Currency = field(default_factory=Currency.zero)
    held: Currency = field(default_factory=Currency.zero)
    total: Currency = field(default_factory=Currency.zero)
    locked: bool = False

    transactions: Dict[int, Transaction] = field(default_factory=dict, repr=False, compare=False)
    disputes: Dict[int, DisputeState] = field(default_factory=dict, repr=False, compare=False)

    def credit(self, amount: Currency) -> None:
        self.available += amount
        self.total += amount

    def debit(self, amount: Currency) -> None:
        self.available -= amount
        self.total -= amount

    def hold(self, amount: Currency) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Currency) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Currency) -> None:
        self.held -= amount
        self.total -= amount

    def has_transaction(self, transaction_id: int) -> bool:
        return transaction_id in self.transactions

    def record_transaction(self, transaction: Transaction) -> None:
        """Store a deposit or withdrawal for future dispute lookups."""
        self.transactions[transaction.transaction_id] = transaction

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self.transactions.get(transaction_id)

    def get_dispute_state(self, transaction_id: int) -> Optional[DisputeState]:
        return self.disputes.get(transaction_id)

    def set_dispute_state(self, transaction_id: int, state: DisputeState) -> None:
        self.disputes[transaction_id] = state


class ProcessingStats:
    """Counters for rows read from the input and rows skipped as malformed."""

    def __init__(self):
        self.read = 0
        self.skipped = 0

    def record_read(self):
        self.read += 1

    def record_skipped(self):
        self.skipped += 1

    @property
    def forwarded(self) -> int:
        return self.read - self.skipped
