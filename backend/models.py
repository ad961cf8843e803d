"""
SQLAlchemy models for the Print Engine API

Print settings are stored as flat key/value rows in the settings table,
one category per scope ("print" shared, "print:<document_type>" overrides).
"""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, UniqueConstraint
from sqlalchemy.sql import func

from database import Base


class Setting(Base):
    """Runtime configuration stored in database"""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    category = Column(String(50), nullable=False)
    key = Column(String(50), nullable=False)
    value = Column(Text)
    value_type = Column(String(20), default='string')  # string, number, boolean
    description = Column(Text)
    updated_at = Column(TIMESTAMP(timezone=True), default=func.current_timestamp())

    __table_args__ = (
        UniqueConstraint('category', 'key', name='uq_settings_category_key'),
        {'sqlite_autoincrement': True},
    )
