import sys
import logging
from typing import Dict, Optional, TextIO

from models import ClientAccount
from payments_engine import PaymentsEngine

logger = logging.getLogger(__name__)

OUTPUT_HEADER = "client,available,held,total,locked"


def format_account(account: ClientAccount) -> str:
    return (
        f"{account.client_id},"
        f"{account.available},"
        f"{account.held},"
        f"{account.total},"
        f"{str(account.locked).lower()}"
    )


def write_balances(accounts: Dict[int, ClientAccount], stream: Optional[TextIO] = None) -> None:
    """Write one CSV row per account, ordered by client id."""
    stream = sys.stdout if stream is None else stream
    print(OUTPUT_HEADER, file=stream)
    for client_id in sorted(accounts.keys()):
        print(format_account(accounts[client_id]), file=stream)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if len(argv) != 1:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        return 1

    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(argv[0])
    except OSError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    write_balances(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
