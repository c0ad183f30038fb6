from functools import lru_cache

from fastapi import Depends

from adapter.fake.user_repository import FakeUserRepository
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.sql.connection import get_engine, get_session_factory, ping
from adapter.sql.user_repository import SqlUserRepository
from domain.model.errors import StorageUnavailableError
from port.user_repository import UserRepository
from services.password_hasher import PasswordHasher
from services.token_service import TokenService
from utils.settings import Settings, load_settings

# Shared store for STORAGE_BACKEND=memory; lives as long as the process
_memory_repo = FakeUserRepository()


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def _hasher_for(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return _hasher_for(settings.bcrypt_rounds)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def _get_mongo_db(settings: Settings):
    """Get MongoDB database, raising StorageUnavailableError if unreachable."""
    client = get_mongodb_client(settings.mongo_url)
    if client is None:
        raise StorageUnavailableError("Database unavailable")
    return client[settings.mongodb_database]


def get_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository:
    if settings.storage_backend == "memory":
        return _memory_repo
    if settings.storage_backend == "mongodb":
        return MongoUserRepository(_get_mongo_db(settings))
    return SqlUserRepository(get_session_factory(get_engine(settings.database_url)))


def check_storage(settings: Settings) -> bool:
    """Return True if the configured store answers a ping."""
    if settings.storage_backend == "memory":
        return True
    if settings.storage_backend == "mongodb":
        return get_mongodb_client(settings.mongo_url) is not None
    return ping(get_engine(settings.database_url))
