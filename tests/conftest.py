"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
Settings are read once at import time, so the environment (JWT keys, cheap
argon2 parameters, captcha off) must be in place before anything from
``xeoos`` is imported.
"""

import os

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

_signing_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault(
    "AUTH_JWT_PRIVATE_KEY",
    _signing_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode(),
)
os.environ.setdefault(
    "AUTH_JWT_PUBLIC_KEY",
    _signing_key.public_key()
    .public_bytes(serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo)
    .decode(),
)
os.environ.setdefault("AUTH_ARGON2_TIME_COST", "1")
os.environ.setdefault("AUTH_ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("AUTH_ARGON2_PARALLELISM", "1")
os.environ.setdefault("AUTH_ARGON2_HASH_LEN", "16")
os.environ.setdefault("AUTH_PASSWORD_BUFFER", "xo")
os.environ.setdefault("AUTH_PASSWORD_PEPPER", "pepper")
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("DB_CREATE_TABLES", "false")
os.environ.setdefault("TURNSTILE_ENABLED", "false")
os.environ.setdefault("TRANSLATE_WORKER_PASSWORD", "worker-secret")
os.environ.setdefault("APP_RATE_LIMIT_REQUESTS", "30")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from xeoos.adapters.captcha.turnstile import AbstractCaptchaVerifier
from xeoos.adapters.email.base import AbstractEmailSender, EmailMessage
from xeoos.adapters.realtime.base import AbstractRealtime, user_channel
from xeoos.adapters.search.base import AbstractSearchIndex, SearchPage
from xeoos.adapters.translate.base import AbstractTranslateDispatcher
from xeoos.api import deps
from xeoos.core import passwords, tokens
from xeoos.core.app_factory import create_app
from xeoos.core.errors import ExternalServiceAppError, ValidationAppError
from xeoos.core.rate_limit import reset_rate_limiter
from xeoos.db import models
from xeoos.db.session import Base, build_engine, get_db


class FakeRealtime(AbstractRealtime):
    """Records publishes; ``online`` holds the uids reported as present."""

    def __init__(self) -> None:
        self.published: list[tuple[str, str, Any]] = []
        self.online: set[int] = set()
        self.token_requests: list[dict[str, Any]] = []
        self.fail_publish = False

    async def publish(self, channel: str, name: str, data: Any) -> None:
        if self.fail_publish:
            raise ExternalServiceAppError(code="realtime_unavailable", message="publish failed")
        self.published.append((channel, name, data))

    async def presence(self, channel: str) -> list[str]:
        return [str(uid) for uid in self.online if user_channel(uid) == channel]

    async def request_token(self, client_id: str, *, ttl_ms: int, capability: dict[str, list[str]]) -> dict[str, Any]:
        self.token_requests.append({"client_id": client_id, "ttl_ms": ttl_ms, "capability": capability})
        return {"token": "realtime-token", "clientId": client_id, "expires": ttl_ms}


class FakeEmailSender(AbstractEmailSender):
    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail = False

    async def send(self, message: EmailMessage) -> str | None:
        if self.fail:
            raise ExternalServiceAppError(code="email_delivery_failed", message="Email delivery failed")
        self.sent.append(message)
        return f"msg-{len(self.sent)}"


class FakeSearchIndex(AbstractSearchIndex):
    def __init__(self) -> None:
        self.documents: dict[Any, dict[str, Any]] = {}
        self.deleted: list[Any] = []
        self.queries: list[dict[str, Any]] = []
        self.page = SearchPage()

    async def search(self, query: str, *, limit: int, offset: int, filter: str | None = None) -> SearchPage:
        self.queries.append({"query": query, "limit": limit, "offset": offset, "filter": filter})
        return self.page

    async def upsert(self, documents: list[dict[str, Any]]) -> None:
        for document in documents:
            self.documents[document["id"]] = document

    async def delete(self, document_id: int | str) -> None:
        self.deleted.append(document_id)
        self.documents.pop(document_id, None)


class FakeDispatcher(AbstractTranslateDispatcher):
    def __init__(self) -> None:
        self.dispatched: list[str] = []
        self.fail = False

    async def dispatch(self, task_id: str) -> None:
        if self.fail:
            raise ExternalServiceAppError(code="server_error", message="worker unreachable")
        self.dispatched.append(task_id)


class FakeCaptcha(AbstractCaptchaVerifier):
    def __init__(self) -> None:
        self.calls: list[tuple[str | None, str | None]] = []
        self.reject = False

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        self.calls.append((token, remote_ip))
        if self.reject:
            raise ValidationAppError(code="turnstile_failed", message="Human verification failed")


class Fakes:
    def __init__(self) -> None:
        self.realtime = FakeRealtime()
        self.email = FakeEmailSender()
        self.search = FakeSearchIndex()
        self.dispatcher = FakeDispatcher()
        self.captcha = FakeCaptcha()


@pytest.fixture(autouse=True)
def fresh_rate_limiter() -> Iterator[None]:
    """Every test starts with an empty limiter (all requests share one client IP)."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()


@pytest.fixture
def session_factory() -> Iterator[sessionmaker]:
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory) -> Iterator[Session]:
    """Session for seeding and assertions; call ``db.expire_all()`` after requests."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fakes() -> Fakes:
    return Fakes()


@pytest.fixture
def app(session_factory, fakes):
    application = create_app()

    def override_get_db() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[deps.get_realtime] = lambda: fakes.realtime
    application.dependency_overrides[deps.get_email_sender] = lambda: fakes.email
    application.dependency_overrides[deps.get_search_index] = lambda: fakes.search
    application.dependency_overrides[deps.get_translate_dispatcher] = lambda: fakes.dispatcher
    application.dependency_overrides[deps.get_captcha_verifier] = lambda: fakes.captcha
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_user(db):
    """Factory creating verified users with an avatar."""

    counter = {"n": 0}

    def _make(username: str | None = None, *, password: str = "secret123", **fields) -> models.User:
        counter["n"] += 1
        name = username or f"user{counter['n']}"
        user = models.User(
            username=name,
            nickname=fields.pop("nickname", name.title()),
            email=fields.pop("email", f"{name}@example.com"),
            password=passwords.hash_password(password),
            email_verified=fields.pop("email_verified", True),
            **fields,
        )
        user.avatars.append(models.Avatar(emoji="🚀", background="linear-gradient(135deg, #000 0%, #fff 100%)"))
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: models.User) -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.sign(tokens.pack(user))}"}

    return _headers


@pytest.fixture
def topic(db) -> models.Topic:
    classification = models.Classification(name="tech", emoji="💻", index=0, name_dede="Technik")
    item = models.Topic(name="python", emoji="🐍", index=0, classification=classification, name_zhcn="Python 编程")
    db.add_all([classification, item])
    db.commit()
    return item


@pytest.fixture
def make_post(db, topic):
    def _make(user: models.User, *, title: str = "Hello", content: str = "World", published: bool = True, **fields) -> models.Post:
        post = models.Post(
            title=title,
            origin=content,
            origin_lang=fields.pop("origin_lang", "en-US"),
            published=published,
            user_uid=user.uid,
            **fields,
        )
        post.topics.append(topic)
        db.add(post)
        db.commit()
        return post

    return _make
