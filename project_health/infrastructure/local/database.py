"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from project_health.core.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class ProjectORM(Base):
    """Project ORM model."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), default="active", index=True)

    # Health calculation mode
    health_calculation_type = Column(String(20), default="automatic")
    manual_status_color = Column(String(10), nullable=True)
    manual_health_percentage = Column(Integer, nullable=True)

    # Displayed dates (auto = follow milestones, overridden = edited by hand)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    dates_overridden = Column(Boolean, default=False, nullable=False)

    # Cached engine outputs
    computed_status_color = Column(String(10), nullable=True, index=True)
    computed_health_percentage = Column(Integer, nullable=True)
    health_reasoning = Column(Text, nullable=True)
    calculated_start_date = Column(Date, nullable=True)
    calculated_end_date = Column(Date, nullable=True)
    total_days = Column(Integer, nullable=True)
    working_days = Column(Integer, nullable=True)
    total_days_remaining = Column(Integer, nullable=True)
    working_days_remaining = Column(Integer, nullable=True)
    health_calculated_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class MilestoneORM(Base):
    """Milestone ORM model."""

    __tablename__ = "milestones"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    project_id = Column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(500), nullable=False)
    date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    completion = Column(Float, default=0.0, nullable=False)
    weight = Column(Integer, default=3, nullable=False)
    status = Column(String(20), default="on-track")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ===========================================
# Engine / Session
# ===========================================


def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=False)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

