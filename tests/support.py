# tests/support.py
from types import SimpleNamespace

SECRET = b"0123456789abcdef" * 4
T0 = 1_700_000_000
USERS = {"alice": "wonderland", "bob": "builder"}


class FakeClock:
    def __init__(self, now: float = T0) -> None:
        self.now = float(now)

    def __call__(self) -> float:
        return self.now

    def set(self, now: float) -> None:
        self.now = float(now)

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTokenStore:
    def __init__(self, fail_on_remove: bool = False) -> None:
        self.stored = []
        self.removed = []
        self.fail_on_remove = fail_on_remove

    def store(self, user_id, token, timeout):
        self.stored.append((user_id, token, timeout))

    def remove(self, user_id, token):
        if self.fail_on_remove:
            raise RuntimeError("store unavailable")
        self.removed.append((user_id, token))


def check_password(username: str, password: str) -> bool:
    return USERS.get(username) == password


def bearer_request(token=None, header=None, **headers):
    """Minimal request stand-in for the framework-agnostic core."""
    if header is not None:
        headers["Authorization"] = header
    elif token is not None:
        headers["Authorization"] = f"Bearer {token}"
    return SimpleNamespace(headers=headers, cookies={})
