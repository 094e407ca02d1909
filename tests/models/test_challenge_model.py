"""Tests for the HTTP-01 challenge and authorization entities."""

from __future__ import annotations

import dataclasses

import pytest

from acmewell.client.base import ValidationError
from acmewell.core.types import ChallengeStatus, ChallengeType
from acmewell.models.challenge import Authorization, Http01Challenge


class TestHttp01Challenge:
    def test_snapshot_contains_proof_fields(self, challenge):
        data = challenge.to_dict()
        assert data["type"] == "http-01"
        assert data["token"] == "example.com-token"
        assert data["key_authorization"] == "abc123"
        assert data["content_type"] == "text/plain"
        assert data["status"] == "pending"

    def test_http01_is_the_only_challenge_type(self):
        assert [t.value for t in ChallengeType] == ["http-01"]

    def test_from_dict_restores_extra_state(self):
        data = {
            "token": "t",
            "key_authorization": "t.thumb",
            "url": "https://ca.example/chall/1",
            "status": "valid",
            "extra": {"account_url": "https://ca.example/acct/9"},
        }
        challenge = Http01Challenge.from_dict(data)
        assert challenge.status is ChallengeStatus.VALID
        assert challenge.extra == {"account_url": "https://ca.example/acct/9"}
        assert challenge.content_type == "text/plain"

    def test_from_dict_missing_token(self):
        with pytest.raises(ValueError, match="'token'"):
            Http01Challenge.from_dict({"key_authorization": "x"})

    def test_file_content_is_key_authorization(self, challenge):
        assert challenge.file_content == "abc123"

    def test_frozen(self, challenge):
        with pytest.raises(dataclasses.FrozenInstanceError):
            challenge.token = "other"  # type: ignore[misc]


class TestAuthorization:
    def test_http01_returns_first_challenge(self, challenge):
        authz = Authorization(identifier="example.com", challenges=(challenge,))
        assert authz.http01 is challenge

    def test_http01_missing(self):
        with pytest.raises(ValidationError, match="no http-01"):
            Authorization(identifier="example.com").http01  # noqa: B018
