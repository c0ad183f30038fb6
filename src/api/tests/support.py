"""Shared wiring for route tests: in-memory store, test secret, cheap bcrypt."""

from fastapi.testclient import TestClient

from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import get_password_hasher, get_settings, get_user_repo
from api.main import app
from services.password_hasher import PasswordHasher
from services.token_service import TokenService
from utils.settings import Settings

TEST_SETTINGS = Settings(jwt_secret_key="test-secret-key", bcrypt_rounds=4, storage_backend="memory")


def build_client(repo: FakeUserRepository | None = None, **client_kwargs) -> tuple[TestClient, FakeUserRepository]:
    """Return a TestClient wired to a fresh FakeUserRepository.

    Call ``app.dependency_overrides.clear()`` in tearDown.
    """
    repo = repo if repo is not None else FakeUserRepository()
    hasher = PasswordHasher(rounds=TEST_SETTINGS.bcrypt_rounds)

    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    app.dependency_overrides[get_user_repo] = lambda: repo
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    return TestClient(app, **client_kwargs), repo


def token_service(**kwargs) -> TokenService:
    return TokenService(TEST_SETTINGS, **kwargs)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
