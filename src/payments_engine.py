import csv
import re
import logging
from typing import Dict, Iterable, Iterator, Optional

from currency import Currency
from models import Transaction, TransactionType, ClientAccount, ProcessingStats
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)

_UNSIGNED = re.compile(r"\+?[0-9]+")


def parse_unsigned(text: str) -> int:
    """Parse an unsigned ASCII integer. Signs other than "+" and separators are rejected."""
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    return int(text)


class PaymentsEngine:
    """
    Feeds transactions from a CSV file to the ledger, strictly in file order.
    Malformed rows are reported and skipped; the run carries on with the next row.
    """

    def __init__(self, processor: Optional[TransactionProcessor] = None):
        self._processor = processor if processor is not None else TransactionProcessor()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        accounts = self.process_transactions(self.read_transactions(filepath))

        logger.info(
            f"Read: {self._stats.read}, "
            f"Skipped: {self._stats.skipped}, "
            f"Accounts: {len(accounts)}"
        )
        return accounts

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        for transaction in transactions:
            self._processor.process_transaction(transaction)
        return self._processor.state.get_all_accounts()

    def read_transactions(self, filepath: str) -> Iterator[Transaction]:
        """
        Lazily read CSV rows as transactions. OSError on the file propagates.

        Undecodable bytes are replaced so the row fails to parse on its own.
        Rows the csv module cannot split are reported and skipped.
        """
        with open(filepath, "r", newline="", encoding="utf-8", errors="replace") as f:
            reader = csv.DictReader(f)
            while True:
                try:
                    row = next(reader)
                except StopIteration:
                    break
                except csv.Error as e:
                    self._stats.record_read()
                    self._stats.record_skipped()
                    logger.warning(f"Failed to read line {reader.line_num}: {e}")
                    continue

                self._stats.record_read()
                transaction = self._parse_csv_row(row, reader.line_num)
                if transaction is None:
                    self._stats.record_skipped()
                    continue
                yield transaction

    def _parse_csv_row(self, row: Dict[str, str], line_num: int) -> Optional[Transaction]:
        """Parse CSV row into Transaction."""
        try:
            normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

            transaction_type = TransactionType.parse(normalized["type"])
            client_id = parse_unsigned(normalized["client"])
            transaction_id = parse_unsigned(normalized["tx"])

            amount = None
            amount_str = normalized.get("amount", "")
            if transaction_type.carries_amount and amount_str:
                amount = Currency.parse(amount_str)
                if amount < Currency.zero():
                    raise ValueError(f"negative amount {amount_str}")

            return Transaction(
                transaction_type=transaction_type,
                client_id=client_id,
                transaction_id=transaction_id,
                amount=amount,
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to parse line {line_num} {row}: {e}")
            return None
