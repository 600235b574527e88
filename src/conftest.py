"""Project-wide fixtures."""

import secrets
import string
import typing as t
from datetime import datetime, time, timedelta

import faker
import pytest
from django.contrib.auth.models import User
from django.core.cache import cache
from django.utils import timezone
from pytest import MonkeyPatch

from turnstile.celery import app as celery_app


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Raise the per-client throttles so tests are not rate limited."""
    monkeypatch.setattr("common.throttling.ClaimChallengeThrottle.rate", "1000/min")
    monkeypatch.setattr("common.throttling.ClaimThrottle.rate", "1000/min")


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    # the app may have read its configuration before the override
    celery_app.conf.update(task_always_eager=True, task_eager_propagates=True)


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Throttle history lives in the cache; start every test clean."""
    cache.clear()


class UserFactory:
    """Factory for creating users for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> User:
        username = kwargs.pop("username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(10)))
        email = kwargs.pop("email", f"{username}@example.com")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> User:
        return self.create_user(**kwargs)


@pytest.fixture
def user_factory() -> UserFactory:
    return UserFactory()


@pytest.fixture
def next_week() -> datetime:
    today = timezone.now()
    same_time_next_week = today + timedelta(days=7)
    noon = time(hour=12, minute=0)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), noon),
        timezone.get_current_timezone(),
    )
