from typing import Dict, Optional

from models import ClientAccount


class StateManager:
    """
    Holds every client account seen during a run, keyed by client id.
    Accounts are kept in the order they were first opened and are never removed.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        """Return the account for a client, or None if it was never opened."""
        return self._accounts.get(client_id)

    def add_account(self, account: ClientAccount) -> None:
        self._accounts[account.client_id] = account

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)
