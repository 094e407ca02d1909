"""HTTP-01 challenge and authorization entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from acmewell.client.base import ValidationError
from acmewell.core.types import ChallengeStatus, ChallengeType


@dataclass(frozen=True)
class Http01Challenge:
    """Snapshot of one outstanding HTTP-01 proof obligation.

    ``extra`` carries whatever the :class:`ValidationClient` needs to
    rebuild a live handle from the snapshot alone (account URL, nonce
    state, ...).  The core never inspects it.
    """

    token: str
    key_authorization: str
    content_type: str = "text/plain"
    url: str = ""
    status: ChallengeStatus = ChallengeStatus.PENDING
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def file_content(self) -> str:
        """Proof body served at the well-known URL."""
        return self.key_authorization

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": ChallengeType.HTTP_01.value,
            "token": self.token,
            "key_authorization": self.key_authorization,
            "content_type": self.content_type,
            "url": self.url,
            "status": str(self.status),
            "extra": dict(self.extra),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Http01Challenge:
        """Rebuild a challenge from :meth:`to_dict` output.

        Raises :class:`ValueError` when a required field is missing.
        """
        try:
            token = data["token"]
            key_authz = data["key_authorization"]
        except KeyError as exc:
            msg = f"Challenge snapshot is missing {exc.args[0]!r}"
            raise ValueError(msg) from exc
        return cls(
            token=token,
            key_authorization=key_authz,
            content_type=data.get("content_type", "text/plain"),
            url=data.get("url", ""),
            status=ChallengeStatus(data.get("status", ChallengeStatus.PENDING)),
            extra=dict(data.get("extra") or {}),
        )


@dataclass(frozen=True)
class Authorization:
    identifier: str
    status: str = ChallengeStatus.PENDING.value
    url: str = ""
    challenges: tuple[Http01Challenge, ...] = ()

    @property
    def http01(self) -> Http01Challenge:
        """Return the HTTP-01 challenge offered by this authorization."""
        if not self.challenges:
            msg = f"Authorization for '{self.identifier}' offers no http-01 challenge"
            raise ValidationError(msg)
        return self.challenges[0]
