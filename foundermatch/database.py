"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for profile and match storage.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path

from sqlalchemy import (
    create_engine,
    event,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from .scoring import ProfileSnapshot

Base = declarative_base()


class MatchStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CONNECTED = "connected"


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Profile(Base):
    """Founder attributes plus the co-founder they are looking for."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, unique=True, index=True)

    founder_status = Column(String, nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    industry = Column(String, nullable=False)
    current_occupation = Column(String, nullable=False)
    years_experience = Column(Integer, nullable=False, default=0)
    commitment_level = Column(String, nullable=False)
    financial_contribution = Column(String, nullable=False)
    personality_traits = Column(JSON, nullable=False, default=list)
    location = Column(String, nullable=False)

    preferred_skills = Column(JSON, nullable=False, default=list)
    preferred_founder_type = Column(String, nullable=False)
    preferred_industry = Column(String, nullable=False)
    preferred_commitment_level = Column(String, nullable=False)
    preferred_financial = Column(String, nullable=False)
    preferred_personality_traits = Column(JSON, nullable=False, default=list)
    preferred_location = Column(String, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    def to_snapshot(self) -> ProfileSnapshot:
        """Detach the scoring inputs from the ORM row."""
        return ProfileSnapshot(
            user_id=self.user_id,
            founder_status=self.founder_status,
            industry=self.industry,
            current_occupation=self.current_occupation,
            years_experience=self.years_experience or 0,
            commitment_level=self.commitment_level,
            financial_contribution=self.financial_contribution,
            skills=list(self.skills or []),
            personality_traits=list(self.personality_traits or []),
            location=self.location,
            preferred_skills=list(self.preferred_skills or []),
            preferred_founder_type=self.preferred_founder_type,
            preferred_industry=self.preferred_industry,
            preferred_commitment_level=self.preferred_commitment_level,
            preferred_financial=self.preferred_financial,
            preferred_personality_traits=list(self.preferred_personality_traits or []),
            preferred_location=self.preferred_location,
        )


class Match(Base):
    """Scored relationship between two profiles."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("pair_low_id", "pair_high_id", name="uq_matches_profile_pair"),
    )

    id = Column(Integer, primary_key=True)
    founder_a_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    founder_b_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    # min/max of the two profile ids, so (a, b) and (b, a) collide
    pair_low_id = Column(Integer, nullable=False)
    pair_high_id = Column(Integer, nullable=False)

    overall_score = Column(Float, nullable=False)
    industry_score = Column(Float, nullable=False)
    skills_score = Column(Float, nullable=False)
    founder_status_score = Column(Float, nullable=False)
    commitment_score = Column(Float, nullable=False)
    financial_score = Column(Float, nullable=False)
    personality_score = Column(Float, nullable=False)
    location_score = Column(Float, nullable=False)

    status = Column(String, nullable=False, default=MatchStatus.PENDING.value)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    founder_a = relationship("Profile", foreign_keys=[founder_a_id], lazy="joined")
    founder_b = relationship("Profile", foreign_keys=[founder_b_id], lazy="joined")


def normalized_pair(profile_id_a: int, profile_id_b: int):
    """Order-independent key for a pair of profile ids."""
    return min(profile_id_a, profile_id_b), max(profile_id_a, profile_id_b)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def session_factory(db_path: Path) -> sessionmaker:
    """
    Build a session factory bound to the SQLite file.

    Args:
        db_path: Path to SQLite database file

    Returns:
        sessionmaker producing sessions with expire_on_commit disabled, so
        rows stay readable after the transaction that loaded them commits
    """
    engine = create_engine(f"sqlite:///{db_path}")
    return sessionmaker(bind=engine, expire_on_commit=False)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    return session_factory(db_path)()
