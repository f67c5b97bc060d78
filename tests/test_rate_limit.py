"""Tests for rate limit configuration"""
from slowapi.middleware import SlowAPIMiddleware

from sge.config import settings
from sge.main import app
from sge.middleware.rate_limit import RATE_LIMITS, get_rate_limit, limiter


def test_credential_endpoints_have_own_limits():
    assert get_rate_limit("login") == "10/minute"
    assert get_rate_limit("register") == "5/minute"
    assert get_rate_limit("refresh") == "30/minute"


def test_unknown_endpoint_falls_back_to_default():
    assert get_rate_limit("employees") == settings.RATE_LIMIT_DEFAULT[0]


def test_every_configured_limit_is_applied():
    """Test that each entry in RATE_LIMITS decorates an auth route"""
    limited = {name.rsplit(".", 1)[-1] for name in limiter._route_limits}
    assert set(RATE_LIMITS) <= limited


def test_default_limits_are_enforced_by_middleware():
    assert app.state.limiter is limiter
    assert any(middleware.cls is SlowAPIMiddleware for middleware in app.user_middleware)
