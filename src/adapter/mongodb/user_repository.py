"""MongoDB implementation of UserRepository."""

from dataclasses import asdict
from datetime import datetime
from logging import getLogger

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, StorageError
from domain.model.user import UPDATABLE_FIELDS, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        try:
            self.collection.create_index([('email', ASCENDING)], name='idx_users_email', unique=True)
            self.collection.create_index([('created_at', DESCENDING)], name='idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            first_name=doc.get('first_name'),
            last_name=doc.get('last_name'),
            phone=doc.get('phone'),
            address=doc.get('address'),
            city=doc.get('city'),
            postal_code=doc.get('postal_code'),
            avatar_url=doc.get('avatar_url'),
            loyalty_points=doc.get('loyalty_points', '0'),
            marketing_consent=doc.get('marketing_consent', 'false'),
            push_notifications=doc.get('push_notifications', 'true'),
        )

    def insert(self, user: User) -> User:
        """Insert a new user document and return the User."""
        user_doc = asdict(user)
        user_doc['_id'] = user_doc.pop('id')
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"userId": user.id})
            raise DuplicateError("User with this email already exists")
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"userId": user.id, "error": str(e)})
            raise StorageError("Failed to create user") from e

        logger.info("User created", extra={"userId": user.id})
        return self._to_domain(user_doc)

    def update(self, user_id: str, changes: dict, updated_at: datetime) -> User | None:
        """$set the changed fields and updated_at. Return None if the document is gone."""
        fields = {name: value for name, value in changes.items() if name in UPDATABLE_FIELDS}
        fields['updated_at'] = updated_at
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to update user") from e

        return self._to_domain(doc) if doc else None

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)})
            raise StorageError("Failed to load user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to load user") from e
        return self._to_domain(doc) if doc else None
