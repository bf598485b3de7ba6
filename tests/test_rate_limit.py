from accounts.core.rate_limit import SlidingWindowRateLimiter


def test_allows_up_to_limit_within_window():
    limiter = SlidingWindowRateLimiter(max_requests=3, window_seconds=60)

    assert [limiter.allow("1.2.3.4", now=t) for t in (0, 1, 2, 3)] == [True, True, True, False]


def test_window_slides():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=10)

    assert limiter.allow("1.2.3.4", now=0) is True
    assert limiter.allow("1.2.3.4", now=5) is False
    assert limiter.allow("1.2.3.4", now=10) is True


def test_clients_are_tracked_separately():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)

    assert limiter.allow("1.2.3.4", now=0) is True
    assert limiter.allow("5.6.7.8", now=0) is True
    assert limiter.allow("1.2.3.4", now=1) is False


def test_reset_clears_history():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60)
    limiter.allow("1.2.3.4", now=0)

    limiter.reset()

    assert limiter.allow("1.2.3.4", now=1) is True


def test_idle_clients_are_forgotten():
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=10)
    limiter.allow("1.2.3.4", now=0)
    limiter.allow("5.6.7.8", now=1)
    assert limiter.tracked_clients() == 2

    limiter.allow("9.9.9.9", now=20)

    assert limiter.tracked_clients() == 1
