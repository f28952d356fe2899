"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (e.g. auth) can use
the same instance without circular imports. Central limit strings and decorators
keep rate limits DRY.
"""

import time
from threading import Lock

from fastapi import HTTPException
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
LOGIN_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
LOGIN_PER_USERNAME_LIMIT = 20  # attempts per minute per username
LOGIN_PER_USERNAME_WINDOW_SEC = 60

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)

# In-memory sliding window for per-username login attempts (all client addresses).
# Usernames whose attempts have all aged out of the window are dropped.
_login_attempts: dict[str, list[float]] = {}
_login_attempts_lock = Lock()


def _prune_login_attempts(cutoff: float) -> None:
    for key in [k for k, times in _login_attempts.items() if times[-1] <= cutoff]:
        del _login_attempts[key]


def check_login_rate_per_username(username: str) -> None:
    """Raise 429 if too many login attempts for this username in the last minute."""
    if not username:
        return
    now = time.monotonic()
    cutoff = now - LOGIN_PER_USERNAME_WINDOW_SEC
    key = username.strip().lower()
    with _login_attempts_lock:
        _prune_login_attempts(cutoff)
        recent = [t for t in _login_attempts.get(key, []) if t > cutoff]
        if len(recent) >= LOGIN_PER_USERNAME_LIMIT:
            _login_attempts[key] = recent
            raise HTTPException(
                status_code=429,
                detail="Too many login attempts for this user; try again later",
            )
        recent.append(now)
        _login_attempts[key] = recent


def reset_login_attempts() -> None:
    """Forget all recorded login attempts (tests)."""
    with _login_attempts_lock:
        _login_attempts.clear()
