"""
Database models for nullresults.club.

A single flat table of failed-experiment write-ups.
"""

from sqlalchemy import Column, Text, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Create declarative base
Base = declarative_base()


class Experiment(Base):
    """One shared failure write-up. Rows are never updated or deleted."""
    __tablename__ = 'experiments'
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Required at the API boundary, not by the schema
    title = Column(Text, nullable=False)
    summary = Column(Text, nullable=False)
    what_tried = Column(Text, nullable=False)
    what_went_wrong = Column(Text, nullable=False)
    what_learned = Column(Text, nullable=False)

    # Optional metadata
    tags = Column(Text, nullable=True)
    author_name = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Experiment(id={self.id}, title={self.title})>"
