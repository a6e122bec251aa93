"""
SQLAlchemy models

``history`` holds one row per completed generation. ``users`` backs the
account and subscription features and is not touched by the generation
pipeline.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func

from study_assistant.db.database import Base


class History(Base):
    __tablename__ = "history"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False)  # solve, summarize, mcq
    subject = Column(Text, nullable=True)
    content = Column(Text, nullable=False)  # extracted text preview
    result = Column(Text, nullable=False)
    file_url = Column(Text, nullable=True)
    file_name = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<History(id={self.id}, type='{self.type}', file_name={self.file_name!r})>"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    is_premium = Column(Boolean, default=False, nullable=False)
    subscription_status = Column(String(20), default="free", nullable=False)  # free, premium, cancelled
    request_count = Column(Integer, default=0, nullable=False)
    expiry_date = Column(DateTime(timezone=True), nullable=True)
    payment_transaction_ids = Column(Text, nullable=True)  # comma separated
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', is_premium={self.is_premium})>"
