"""In-memory session and subscription store."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable

from ..errors import Unauthorized, UnsupportedSymbol
from ..market.seed_prices import SUPPORTED_TICKERS, normalize_ticker

logger = logging.getLogger(__name__)


def mask_token(token: str | None) -> str:
    """Shorten a token for log output."""
    if not token:
        return "<none>"
    return token[:4] + "..."


class SessionStore:
    """Maps session tokens to identities and identities to subscriptions.

    The identity (email) is the durable key: it owns the subscription list.
    A token is a capability that grants access to one identity's record.
    Every login mints a new token, so an identity may hold several live
    tokens and all of them see the same subscriptions.

    Nothing is ever evicted; entries live until the process exits.
    """

    def __init__(self, supported_tickers: Iterable[str] = SUPPORTED_TICKERS) -> None:
        self._supported = frozenset(supported_tickers)
        self._tokens: dict[str, str] = {}  # token -> identity
        self._subscriptions: dict[str, list[str]] = {}  # identity -> tickers, insertion order

    def create_session(self, identity: str) -> str:
        """Mint a new token for ``identity``. Returning identities keep their subscriptions."""
        if identity not in self._subscriptions:
            self._subscriptions[identity] = []
            logger.info("New identity registered: %s", identity)

        token = secrets.token_urlsafe(12)
        while token in self._tokens:
            token = secrets.token_urlsafe(12)
        self._tokens[token] = identity
        logger.debug("Session %s created for %s", mask_token(token), identity)
        return token

    def resolve(self, token: str | None) -> str | None:
        """Identity for a token, or None if the token was never issued."""
        if not token:
            return None
        return self._tokens.get(token)

    def require(self, token: str | None) -> str:
        """Like resolve(), but raises Unauthorized instead of returning None."""
        identity = self.resolve(token)
        if identity is None:
            raise Unauthorized()
        return identity

    def add_subscription(self, token: str | None, ticker: str) -> bool:
        """Subscribe the token's identity to ``ticker``.

        Returns True if the ticker was newly added, False if already present.
        """
        identity = self.require(token)
        ticker = self._check_ticker(ticker)
        subscriptions = self._subscriptions[identity]
        if ticker in subscriptions:
            return False
        subscriptions.append(ticker)
        logger.info("%s subscribed to %s", identity, ticker)
        return True

    def remove_subscription(self, token: str | None, ticker: str) -> bool:
        """Unsubscribe. Returns True if the ticker was present."""
        identity = self.require(token)
        ticker = self._check_ticker(ticker)
        subscriptions = self._subscriptions[identity]
        if ticker not in subscriptions:
            return False
        subscriptions.remove(ticker)
        logger.info("%s unsubscribed from %s", identity, ticker)
        return True

    def list_subscriptions(self, token: str | None) -> list[str]:
        identity = self.require(token)
        return list(self._subscriptions[identity])

    @property
    def session_count(self) -> int:
        return len(self._tokens)

    @property
    def identity_count(self) -> int:
        return len(self._subscriptions)

    def _check_ticker(self, ticker: str) -> str:
        normalized = normalize_ticker(ticker) if isinstance(ticker, str) else ""
        if normalized not in self._supported:
            raise UnsupportedSymbol(str(ticker))
        return normalized
