"""Tests for the expiration policy."""

from datetime import datetime, timedelta, timezone

from shortlinks.lib.expiration import (
    MAX_EXPIRY_MINUTES,
    compute_expiry,
    is_expired,
    utcnow,
)

CREATED = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestComputeExpiry:

    def test_no_lifetime_means_no_expiry(self):
        assert compute_expiry(CREATED) is None
        assert compute_expiry(CREATED, None) is None

    def test_adds_minutes(self):
        assert compute_expiry(CREATED, 1) == CREATED + timedelta(minutes=1)
        assert compute_expiry(CREATED, 90) == datetime(2024, 1, 1, 13, 30, tzinfo=timezone.utc)

    def test_one_year_maximum(self):
        assert compute_expiry(CREATED, MAX_EXPIRY_MINUTES) == CREATED + timedelta(days=365)


class TestIsExpired:

    def test_never_expires_without_timestamp(self):
        assert not is_expired(None, CREATED + timedelta(days=10000))

    def test_boundary_instant_is_still_valid(self):
        assert not is_expired(CREATED, CREATED)

    def test_one_millisecond_after_is_expired(self):
        assert is_expired(CREATED, CREATED + timedelta(milliseconds=1))

    def test_before_expiry(self):
        assert not is_expired(CREATED, CREATED - timedelta(minutes=5))


def test_utcnow_is_timezone_aware():
    assert utcnow().tzinfo is not None
