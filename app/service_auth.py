import logging
import time
from typing import Callable, MutableMapping, Optional


logger = logging.getLogger(__name__)

# Buffer used when the user has not yet entered anything into a form.
TOKEN_REPLACE_MIN_GET = 60


class DsAuth:
    """Session-backed view of the user's eSignature access token.

    The login flow that obtains the token lives elsewhere; it records the
    token through :meth:`store_token` and the example handlers only read it.
    """

    def __init__(self, session: MutableMapping, clock: Callable[[], float] = time.time):
        self.session = session
        self.clock = clock

    @property
    def access_token(self) -> Optional[str]:
        return self.session.get("accessToken")

    def check_token(self, buffer_min: int = TOKEN_REPLACE_MIN_GET) -> bool:
        token = self.session.get("accessToken")
        expiration = self.session.get("tokenExpiration")
        if not token or not expiration:
            logger.debug("No access token in session")
            return False
        if float(expiration) - buffer_min * 60 < self.clock():
            logger.debug("Access token expires within %s minutes", buffer_min)
            return False
        return True

    def set_eg(self, eg: str) -> None:
        self.session["eg"] = eg

    def store_token(self, access_token: str, expires_in: int, account_id: str, base_path: str) -> None:
        self.session["accessToken"] = access_token
        self.session["tokenExpiration"] = self.clock() + int(expires_in)
        self.session["accountId"] = account_id
        self.session["basePath"] = base_path
