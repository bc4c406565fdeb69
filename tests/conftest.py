# tests/conftest.py
from datetime import timedelta

import pytest

from pkg_jwt_auth.config.settings import TokenAuthSettings
from pkg_jwt_auth.integrations.common.auth_factory import create_token_authenticator

from support import SECRET, FakeClock, RecordingTokenStore, check_password


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return TokenAuthSettings(
        realm="test zone",
        secret_key=SECRET,
        timeout=timedelta(hours=1),
        max_refresh=timedelta(hours=2),
    )


@pytest.fixture
def store():
    return RecordingTokenStore()


@pytest.fixture
def auth(settings, store, clock):
    return create_token_authenticator(
        settings,
        authenticator=check_password,
        token_store=store,
        clock=clock,
    )
