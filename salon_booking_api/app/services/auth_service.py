"""
Staff login against the configured account mapping.

There is no user table: accounts come from configuration (see
``core.config.load_admin_accounts``) and a successful login only
produces a signed token.
"""

import logging
from typing import Mapping, Optional

from ..core.config import AdminAccount
from ..core.passwords import verify_password
from ..core.security import create_access_token

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, accounts: Mapping[str, AdminAccount], secret_key: str, expire_minutes: int) -> None:
        self.accounts = accounts
        self.secret_key = secret_key
        self.expire_minutes = expire_minutes

    def authenticate(self, username: str, password: str) -> Optional[AdminAccount]:
        """Return the matching account, or ``None`` for any mismatch.

        Unknown usernames and wrong passwords are indistinguishable to
        the caller.
        """
        account = self.accounts.get(username)
        if account is None or not verify_password(password, account.password_hash):
            logger.warning("Failed portal login for '%s'", username)
            return None
        logger.info("User %s logged in", account.username)
        return account

    def issue_token(self, account: AdminAccount) -> str:
        return create_access_token(
            {"username": account.username, "role": account.role},
            secret_key=self.secret_key,
            expires_in=self.expire_minutes * 60,
        )
