"""
Register a user from the command line. Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD
Example:
  python -m app.scripts.create_user johnsmith john.smith@example.com securePassword123
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.errors import GatewayError
from app.core.security import get_token_service
from app.core.store import get_record_store
from app.services.accounts import AccountService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Register a Book Gateway user.")
    parser.add_argument("username", help="Unique username")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (stored as given)")
    args = parser.parse_args(argv)

    settings = get_settings()
    accounts = AccountService(
        get_record_store(), get_token_service(), table=settings.USERS_TABLE
    )
    try:
        user = accounts.register(args.username.strip(), args.email.strip(), args.password)
    except GatewayError as e:
        print(e.message, file=sys.stderr)
        return 1
    print(f"Created user '{user.username}' with id {user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
