# tests/test_refresh.py
from datetime import timedelta

import jwt
import pytest

from pkg_jwt_auth.config.settings import TokenAuthSettings
from pkg_jwt_auth.domain.exceptions import (
    AuthenticationError,
    InvalidSignatureError,
    RefreshWindowExceededError,
    TokenExpiredError,
)
from pkg_jwt_auth.integrations.common.auth_factory import create_token_authenticator

from support import SECRET, T0, RecordingTokenStore, bearer_request, check_password


def test_worked_example(auth, clock):
    # timeout=1h, max_refresh=2h
    token_a = auth.login("alice", "wonderland")
    assert token_a.claims.expires_at == T0 + 3600
    assert token_a.claims.original_issued_at == T0

    clock.set(T0 + 3000)
    token_b = auth.refresh(bearer_request(token_a.token))
    assert token_b.claims.expires_at == T0 + 6600
    assert token_b.claims.original_issued_at == T0
    assert token_b.subject == "alice"

    clock.set(T0 + 7300)
    with pytest.raises(AuthenticationError):
        auth.refresh(bearer_request(token_b.token))


def test_window_is_measured_from_original_issuance(auth, clock):
    token = auth.login("alice", "wonderland").token

    clock.set(T0 + 3000)
    token = auth.refresh(bearer_request(token)).token
    clock.set(T0 + 6000)
    token_c = auth.refresh(bearer_request(token))
    assert token_c.claims.expires_at == T0 + 9600
    assert token_c.claims.original_issued_at == T0

    clock.set(T0 + 7300)
    with pytest.raises(RefreshWindowExceededError):
        auth.refresh(bearer_request(token_c.token))

    # still valid, just no longer renewable
    assert auth.authenticate(bearer_request(token_c.token)).identity == "alice"


def test_refresh_at_window_boundary_is_allowed(auth, clock):
    token = auth.login("alice", "wonderland").token

    clock.set(T0 + 3000)
    token = auth.refresh(bearer_request(token)).token
    clock.set(T0 + 6000)
    token = auth.refresh(bearer_request(token)).token

    clock.set(T0 + 7200)
    renewed = auth.refresh(bearer_request(token))
    assert renewed.claims.expires_at == T0 + 7200 + 3600
    assert renewed.claims.original_issued_at == T0


def test_refresh_keeps_extra_claims_and_new_token_verifies(settings, clock):
    auth = create_token_authenticator(
        settings,
        authenticator=check_password,
        claims_provider=lambda user_id: {"role": "admin"},
        clock=clock,
    )
    old = auth.login("alice", "wonderland")

    clock.advance(600)
    new = auth.refresh(bearer_request(old.token))
    assert new.token != old.token

    ctx = auth.authenticate(bearer_request(new.token))
    assert ctx.payload == {"id": "alice", "exp": T0 + 600 + 3600, "orig_iat": T0, "role": "admin"}


def test_expired_token_cannot_be_refreshed(auth, clock):
    token = auth.login("alice", "wonderland").token

    clock.advance(3600)
    with pytest.raises(TokenExpiredError):
        auth.refresh(bearer_request(token))


def test_tampered_token_cannot_be_refreshed(auth):
    token = auth.login("alice", "wonderland").token
    header, payload, signature = token.split(".")
    forged = jwt.encode({"id": "mallory", "exp": T0 + 60, "orig_iat": T0}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidSignatureError):
        auth.refresh(bearer_request(f"{header}.{forged.split('.')[1]}.{signature}"))


def test_token_without_orig_iat_is_not_refreshable(auth):
    token = jwt.encode({"id": "alice", "exp": T0 + 60}, SECRET, algorithm="HS256")
    with pytest.raises(RefreshWindowExceededError):
        auth.refresh(bearer_request(token))


def test_refresh_disabled_tokens_are_rejected(clock):
    settings = TokenAuthSettings(realm="r", secret_key=SECRET)
    auth = create_token_authenticator(settings, authenticator=check_password, clock=clock)
    token = auth.login("alice", "wonderland").token

    with pytest.raises(RefreshWindowExceededError):
        auth.refresh(bearer_request(token))


def test_refresh_stores_new_and_removes_old(auth, store, clock):
    old = auth.login("alice", "wonderland").token

    clock.advance(60)
    new = auth.refresh(bearer_request(old)).token

    assert store.stored[-1] == ("alice", new, timedelta(hours=1))
    assert store.removed == [("alice", old)]


def test_failing_removal_hook_does_not_fail_refresh(settings, clock):
    store = RecordingTokenStore(fail_on_remove=True)
    auth = create_token_authenticator(
        settings, authenticator=check_password, token_store=store, clock=clock
    )
    old = auth.login("alice", "wonderland").token

    clock.advance(60)
    new = auth.refresh(bearer_request(old)).token
    assert store.stored[-1][1] == new


def test_old_token_stays_valid_without_store(settings, clock):
    auth = create_token_authenticator(settings, authenticator=check_password, clock=clock)
    old = auth.login("alice", "wonderland").token

    clock.advance(60)
    auth.refresh(bearer_request(old))
    assert auth.authenticate(bearer_request(old)).identity == "alice"
