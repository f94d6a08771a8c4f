"""Shared pytest fixtures for API tests."""

from __future__ import annotations

import os
import tempfile
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="leaderboard-api-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DATA_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["ADMIN_EMAILS"] = "root@example.com"
os.environ["EMAIL_BACKEND"] = "log"
os.environ["WEBSITE_URL"] = "https://leaderboards.example.com"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from leaderboard_api.app import app  # noqa: E402
from leaderboard_api.core import encode_id, engine  # noqa: E402
from leaderboard_api.core.security import create_access_token, hash_password  # noqa: E402
from leaderboard_api.models import (  # noqa: E402
    Category,
    Leaderboard,
    Run,
    RunType,
    SortDirection,
    User,
    UserRole,
)
from leaderboard_api.services.email import (  # noqa: E402
    EmailDeliveryError,
    EmailSender,
    get_email_sender,
)

DEFAULT_PASSWORD = "P4ssword"
BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class RecordingEmailSender(EmailSender):
    """Keeps every accepted message; can be switched to reject hand-offs."""

    def __init__(self) -> None:
        self.sent: List[Dict[str, str]] = []
        self.fail = False

    def enqueue(self, recipient: str, subject: str, html_body: str) -> None:
        if self.fail:
            raise EmailDeliveryError("outbox unavailable")
        self.sent.append({"to": recipient, "subject": subject, "body": html_body})


@pytest.fixture(autouse=True)
def _reset_database() -> Iterator[None]:
    """Give every test an empty schema."""

    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture()
def session() -> Iterator[Session]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def outbox() -> Iterator[RecordingEmailSender]:
    sender = RecordingEmailSender()
    app.dependency_overrides[get_email_sender] = lambda: sender
    yield sender
    app.dependency_overrides.pop(get_email_sender, None)


@pytest.fixture()
def client(outbox: RecordingEmailSender) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(session: Session) -> Callable[..., User]:
    counter = {"value": 0}

    def _make(
        role: UserRole = UserRole.CONFIRMED,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        counter["value"] += 1
        suffix = counter["value"]
        user = User(
            username=username or f"Runner{suffix}",
            email=email or f"runner{suffix}@example.com",
            password=hash_password(password),
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(encode_id(user.id))}"}


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.ADMINISTRATOR)


@pytest.fixture()
def admin_headers(admin: User) -> Dict[str, str]:
    return auth_headers(admin)


@pytest.fixture()
def leaderboard(session: Session) -> Leaderboard:
    board = Leaderboard(name="Super Mario 64", slug="super_mario_64")
    session.add(board)
    session.commit()
    session.refresh(board)
    return board


@pytest.fixture()
def make_category(session: Session, leaderboard: Leaderboard) -> Callable[..., Category]:
    def _make(
        run_type: RunType = RunType.TIME,
        *,
        slug: str = "120_stars",
        sort_direction: SortDirection = SortDirection.ASCENDING,
        deleted: bool = False,
    ) -> Category:
        category = Category(
            leaderboard_id=leaderboard.id,
            name=slug.replace("_", " ").title(),
            slug=slug,
            info="",
            type=run_type,
            sort_direction=sort_direction,
            deleted_at=BASE_TIME if deleted else None,
        )
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    return _make


@pytest.fixture()
def timed_category(make_category: Callable[..., Category]) -> Category:
    return make_category(RunType.TIME)


@pytest.fixture()
def scored_category(make_category: Callable[..., Category]) -> Category:
    return make_category(
        RunType.SCORE, slug="high_score", sort_direction=SortDirection.DESCENDING
    )


@pytest.fixture()
def make_run(session: Session) -> Callable[..., Run]:
    counter = {"value": 0}

    def _make(
        category: Category,
        user: User,
        *,
        time_or_score: int,
        played_on: date = date(2025, 1, 1),
        deleted: bool = False,
        info: str = "",
    ) -> Run:
        counter["value"] += 1
        run = Run(
            category_id=category.id,
            user_id=user.id,
            info=info,
            played_on=played_on,
            time_or_score=time_or_score,
            created_at=BASE_TIME + timedelta(seconds=counter["value"]),
            deleted_at=BASE_TIME if deleted else None,
        )
        session.add(run)
        session.commit()
        session.refresh(run)
        return run

    return _make


def error_fields(payload: Dict[str, Any]) -> List[str]:
    return list(payload["detail"]["errors"].keys())
