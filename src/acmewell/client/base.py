"""Abstract base class for ACME validation clients.

acmewell does not speak the ACME protocol itself.  Everything that
requires talking to the certificate authority (account registration,
authorization creation, verification requests, status polling and
certificate issuance) goes through a :class:`ValidationClient`
adapter supplied by the hosting application.

Adapters must raise :class:`ValidationError` on protocol failures.
The middleware propagates these unchanged to the caller of
``authorize`` / ``register`` / ``new_certificate``.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from acmewell.models.challenge import Authorization, Http01Challenge


class ValidationError(Exception):
    """Raised by validation clients on ACME protocol failure.

    Parameters
    ----------
    detail:
        Human-readable description of the failure.
    retryable:
        Whether the failure is transient and the operation may be retried.

    """

    def __init__(self, detail: str, *, retryable: bool = False) -> None:
        self.detail = detail
        self.retryable = retryable
        super().__init__(detail)


class ValidationClient(abc.ABC):
    """Base class for ACME client adapters."""

    @abc.abstractmethod
    def authorize(self, **options: Any) -> Authorization:
        """Create a new authorization (e.g. ``domain="example.com"``).

        The returned :class:`Authorization` must expose an HTTP-01
        challenge through its ``http01`` property.
        """

    @abc.abstractmethod
    def challenge_from_dict(self, data: dict[str, Any]) -> Http01Challenge:
        """Rebuild a live challenge handle from a stored snapshot."""

    @abc.abstractmethod
    def request_verification(self, challenge: Http01Challenge) -> None:
        """Tell the CA that the challenge is ready to be validated."""

    @abc.abstractmethod
    def poll_status(self, challenge: Http01Challenge) -> str:
        """Fetch the challenge's current status from the CA.

        Returns one of ``pending``, ``processing``, ``valid``,
        ``invalid`` or ``expired``.
        """

    @abc.abstractmethod
    def register(self, **options: Any) -> Any:  # noqa: ANN401
        """Register (or look up) an ACME account."""

    @abc.abstractmethod
    def new_certificate(self, csr: Any) -> Any:  # noqa: ANN401
        """Finalize an order with *csr* and return the issued certificate.

        *csr* reaches the adapter exactly as the application passed it
        (for example a ``cryptography`` CSR object or DER bytes).  Any
        parsing is left to the adapter.
        """
