"""SQLAlchemy implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from adapter.sql.models import UserRecord
from domain.model.errors import DuplicateError, StorageError
from domain.model.user import UPDATABLE_FIELDS, User

logger = getLogger(__name__)


def _as_utc(value):
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlUserRepository:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _to_domain(self, record: UserRecord) -> User:
        """Convert ORM row to User domain model."""
        return User(
            id=record.id,
            email=record.email,
            password_hash=record.password,
            created_at=_as_utc(record.created_at),
            updated_at=_as_utc(record.updated_at),
            **{name: getattr(record, name) for name in UPDATABLE_FIELDS},
        )

    def insert(self, user: User) -> User:
        """Insert a new row and return the stored User."""
        record = UserRecord(
            id=user.id,
            email=user.email,
            password=user.password_hash,
            created_at=user.created_at,
            updated_at=user.updated_at,
            **{name: getattr(user, name) for name in UPDATABLE_FIELDS},
        )
        with self.session_factory() as session:
            try:
                session.add(record)
                session.commit()
            except IntegrityError:
                session.rollback()
                logger.warning("User creation failed: email already exists", extra={"userId": user.id})
                raise DuplicateError("User with this email already exists")
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Failed to create user", extra={"userId": user.id, "error": str(e)[:200]})
                raise StorageError("Failed to create user") from e

            logger.info("User created", extra={"userId": user.id})
            return self._to_domain(record)

    def update(self, user_id: str, changes: dict, updated_at: datetime) -> User | None:
        """Write the changed fields and updated_at. Return None if the row is gone."""
        values = {name: value for name, value in changes.items() if name in UPDATABLE_FIELDS}
        values['updated_at'] = updated_at
        with self.session_factory() as session:
            try:
                result = session.execute(
                    update(UserRecord).where(UserRecord.id == user_id).values(**values)
                )
                if result.rowcount == 0:
                    return None
                session.commit()
                record = session.get(UserRecord, user_id)
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)[:200]})
                raise StorageError("Failed to update user") from e

            return self._to_domain(record)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            with self.session_factory() as session:
                record = session.scalars(
                    select(UserRecord).where(UserRecord.email == email)
                ).first()
                return self._to_domain(record) if record else None
        except SQLAlchemyError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)[:200]})
            raise StorageError("Failed to load user") from e

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            with self.session_factory() as session:
                record = session.get(UserRecord, user_id)
                return self._to_domain(record) if record else None
        except SQLAlchemyError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)[:200]})
            raise StorageError("Failed to load user") from e
