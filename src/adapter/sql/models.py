"""SQLAlchemy ORM models for the relational credential store."""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase

from adapter.sql import USERS_TABLE_NAME


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    __tablename__ = USERS_TABLE_NAME

    id = Column(String(36), primary_key=True)
    email = Column(Text, unique=True, nullable=False)
    password = Column(Text, nullable=False)
    first_name = Column(Text)
    last_name = Column(Text)
    phone = Column(Text)
    address = Column(Text)
    city = Column(Text)
    postal_code = Column(Text)
    avatar_url = Column(Text)
    loyalty_points = Column(String(50), nullable=False, default='0')
    marketing_consent = Column(String(10), nullable=False, default='false')
    push_notifications = Column(String(10), nullable=False, default='true')
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
