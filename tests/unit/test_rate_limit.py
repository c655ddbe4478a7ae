import pytest

from studio_eighty7.adapters.clock import FrozenClock
from studio_eighty7.app_shell.rate_limit import RateLimiter, RateLimitStore
from studio_eighty7.rules.models import RateLimitRules, RateLimitWindow


@pytest.fixture
def rules():
    return RateLimitRules(
        generate=RateLimitWindow(window_seconds=60, max_requests=5),
        contact=RateLimitWindow(window_seconds=3600, max_requests=3),
    )


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def limiter(rules, clock):
    return RateLimiter(rules, store=RateLimitStore(), time_port=clock)


def test_allow_request_basic(limiter):
    key = "test_key"

    assert limiter.allow_request(key, 60, 2).allowed is True
    assert limiter.allow_request(key, 60, 2).allowed is True
    assert limiter.allow_request(key, 60, 2).allowed is False  # Limit reached


def test_denial_reports_positive_wait(limiter, clock):
    key = "wait"
    assert limiter.allow_request(key, 60, 1).allowed
    clock.advance(20)

    decision = limiter.allow_request(key, 60, 1)

    assert decision.allowed is False
    assert decision.retry_after_seconds == 40


def test_wait_is_rounded_up_and_never_zero(limiter, clock):
    key = "round"
    assert limiter.allow_request(key, 60, 1).allowed
    clock.advance(59.6)

    assert limiter.allow_request(key, 60, 1).retry_after_seconds == 1


def test_window_elapses(limiter, clock):
    key = "window"
    assert limiter.allow_request(key, 60, 1).allowed
    assert not limiter.allow_request(key, 60, 1).allowed

    clock.advance(60)

    assert limiter.allow_request(key, 60, 1).allowed


def test_nth_plus_one_generate_request_denied_then_allowed(limiter, clock):
    ip = "203.0.113.7"
    for _ in range(5):
        assert limiter.check_generate(ip).allowed
        clock.advance(1)

    denied = limiter.check_generate(ip)
    assert denied.allowed is False
    assert denied.retry_after_seconds > 0

    # 60s after the first accepted request it leaves the window
    clock.advance(60 - 5)
    assert limiter.check_generate(ip).allowed


def test_denied_requests_are_not_recorded(limiter, clock):
    ip = "198.51.100.1"
    for _ in range(3):
        assert limiter.check_contact(ip).allowed
    for _ in range(10):
        assert not limiter.check_contact(ip).allowed

    clock.advance(3600)
    assert limiter.check_contact(ip).allowed


def test_endpoint_classes_are_independent(limiter):
    ip = "127.0.0.1"
    for _ in range(3):
        assert limiter.check_contact(ip).allowed
    assert not limiter.check_contact(ip).allowed

    assert limiter.check_generate(ip).allowed


def test_clients_are_independent(limiter):
    for _ in range(3):
        assert limiter.check_contact("a").allowed
    assert not limiter.check_contact("a").allowed
    assert limiter.check_contact("b").allowed


def test_unknown_endpoint_class(limiter):
    with pytest.raises(KeyError):
        limiter.check("upload", "127.0.0.1")


def test_zero_limit_always_denies(limiter):
    decision = limiter.allow_request("none", 30, 0)
    assert decision.allowed is False
    assert decision.retry_after_seconds == 30


def test_health_is_exempt(limiter):
    assert limiter.is_exempt("/health")
    assert not limiter.is_exempt("/api/generate")


def test_store_is_per_instance(rules, clock):
    first = RateLimiter(rules, time_port=clock)
    second = RateLimiter(rules, time_port=clock)

    for _ in range(3):
        first.check_contact("ip")
    assert not first.check_contact("ip").allowed
    assert second.check_contact("ip").allowed


def test_store_prunes_expired_keys(limiter, clock):
    limiter.check_generate("ip")
    assert len(limiter.store) == 1

    clock.advance(61)
    limiter.check_contact("other")
    limiter.store.recent("generate:ip", clock.now_utc())

    assert len(limiter.store) == 1

    limiter.store.clear()
    assert len(limiter.store) == 0
