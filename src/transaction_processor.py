from typing import Optional

from currency import Currency
from models import Transaction, TransactionType, ClientAccount, DisputeState
from state_manager import StateManager


class TransactionProcessor:
    """
    Applies transactions to client accounts, one at a time, in input order.

    Invalid transitions (duplicate ids, insufficient funds, disputes on
    unknown or already settled transactions, anything on a locked account)
    are ignored without side effects.
    """

    def __init__(self, state: Optional[StateManager] = None):
        self._state = state if state is not None else StateManager()

    @property
    def state(self) -> StateManager:
        return self._state

    def process_transaction(self, transaction: Transaction) -> None:
        account = self._state.get_account(transaction.client_id)

        if account is None:
            account = self._open_account(transaction)
            if account is not None:
                self._state.add_account(account)
            return

        if account.locked:
            return

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(account, transaction)

    def _open_account(self, transaction: Transaction) -> Optional[ClientAccount]:
        """
        Only a deposit or a withdrawal can open an account.

        A first withdrawal always lacks funds, but the account is still
        opened with a zero balance so its transaction id is reserved.
        """
        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                account = ClientAccount(client_id=transaction.client_id)
                account.credit(transaction.amount)
            case TransactionType.WITHDRAWAL:
                account = ClientAccount(client_id=transaction.client_id)
            case _:
                return None

        account.record_transaction(transaction)
        return account

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> None:
        if account.has_transaction(transaction.transaction_id):
            return

        account.credit(transaction.amount)
        account.record_transaction(transaction)

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> None:
        if account.available - transaction.amount < Currency.zero():
            return

        if account.has_transaction(transaction.transaction_id):
            return

        account.debit(transaction.amount)
        account.record_transaction(transaction)

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> None:
        original = account.get_transaction(transaction.transaction_id)
        if original is None:
            return

        # A transaction can be disputed only once, ever
        if account.get_dispute_state(transaction.transaction_id) is not None:
            return

        # Withdrawn funds already left the account, nothing to hold
        if original.transaction_type == TransactionType.DEPOSIT:
            account.hold(original.amount)
        account.set_dispute_state(transaction.transaction_id, DisputeState.WAITING)

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> None:
        original = account.get_transaction(transaction.transaction_id)
        if original is None:
            return

        if account.get_dispute_state(transaction.transaction_id) != DisputeState.WAITING:
            return

        if original.transaction_type == TransactionType.DEPOSIT:
            account.release_hold(original.amount)
        account.set_dispute_state(transaction.transaction_id, DisputeState.RESOLVED)

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> None:
        original = account.get_transaction(transaction.transaction_id)
        if original is None:
            return

        if account.get_dispute_state(transaction.transaction_id) != DisputeState.WAITING:
            return

        match original.transaction_type:
            case TransactionType.DEPOSIT:
                account.remove_held(original.amount)
            case TransactionType.WITHDRAWAL:
                account.credit(original.amount)
        account.locked = True
        account.set_dispute_state(transaction.transaction_id, DisputeState.RESOLVED)
