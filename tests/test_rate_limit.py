from backend import app
from learnhub.rate_limit import RateLimiter


def test_limiter_blocks_after_max_requests_in_window():
    limiter = RateLimiter(max_requests=2, window_seconds=60)

    assert limiter.allow("1.2.3.4", now=0)
    assert limiter.allow("1.2.3.4", now=1)
    assert not limiter.allow("1.2.3.4", now=2)
    assert limiter.allow("5.6.7.8", now=2)
    assert limiter.allow("1.2.3.4", now=61)


def test_api_requests_are_rate_limited(client):
    original = app.state.rate_limiter
    app.state.rate_limiter = RateLimiter(max_requests=2, window_seconds=60)
    try:
        assert client.get("/api/health").status_code == 200
        assert client.get("/api/health").status_code == 200
        assert client.get("/api/health").status_code == 429
        # Only /api/* is limited.
        assert client.get("/").status_code == 200
    finally:
        app.state.rate_limiter = original


def test_limiter_forgets_idle_clients():
    limiter = RateLimiter(max_requests=5, window_seconds=60)
    limiter.allow("1.2.3.4", now=0)
    limiter.allow("5.6.7.8", now=30)

    limiter.allow("9.9.9.9", now=75)

    assert len(limiter) == 2
    limiter.allow("9.9.9.9", now=200)
    assert len(limiter) == 1
