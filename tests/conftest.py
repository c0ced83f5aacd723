"""
Pytest configuration and shared fixtures.
"""

import pytest
from pathlib import Path
from typing import Dict, Any

from foundermatch.database import init_database, session_factory
from foundermatch.logger import get_logger, reset_logger
from foundermatch.matches import MatchService
from foundermatch.profiles import ProfileService


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with no console output."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def technical_founder() -> Dict[str, Any]:
    """Technical founder looking for a business co-founder, remote only."""
    return {
        "founder_status": "Technical",
        "skills": ["Engineering"],
        "industry": "Tech",
        "current_occupation": "Staff Engineer",
        "years_experience": 8,
        "commitment_level": "Full-time",
        "financial_contribution": "Can invest <$25K personally",
        "personality_traits": ["Visionary"],
        "location": "Remote only",
        "preferred_skills": ["Marketing"],
        "preferred_founder_type": "Business",
        "preferred_industry": "Tech",
        "preferred_commitment_level": "Full-time",
        "preferred_financial": "No personal investment, seeking external funding",
        "preferred_personality_traits": ["Detail-oriented"],
        "preferred_location": "Remote only",
    }


@pytest.fixture
def business_founder() -> Dict[str, Any]:
    """Mirror image of technical_founder."""
    return {
        "founder_status": "Business",
        "skills": ["Marketing"],
        "industry": "Tech",
        "current_occupation": "Head of Growth",
        "years_experience": 6,
        "commitment_level": "Full-time",
        "financial_contribution": "No personal investment, seeking external funding",
        "personality_traits": ["Detail-oriented"],
        "location": "US - West Coast",
        "preferred_skills": ["Engineering"],
        "preferred_founder_type": "Technical",
        "preferred_industry": "Tech",
        "preferred_commitment_level": "Full-time",
        "preferred_financial": "Can invest <$25K personally",
        "preferred_personality_traits": ["Visionary"],
        "preferred_location": "Remote only",
    }


@pytest.fixture
def unrelated_founder() -> Dict[str, Any]:
    """Shares nothing with technical_founder except the remote location credit."""
    return {
        "founder_status": "Operations",
        "skills": ["Legal"],
        "industry": "Healthcare",
        "current_occupation": "Consultant",
        "years_experience": 12,
        "commitment_level": "Weekends only",
        "financial_contribution": "Open to sweat equity arrangements",
        "personality_traits": ["Persistent"],
        "location": "Europe",
        "preferred_skills": ["Design"],
        "preferred_founder_type": "Creative",
        "preferred_industry": "Finance",
        "preferred_commitment_level": "Part-time",
        "preferred_financial": "Open to sweat equity arrangements",
        "preferred_personality_traits": ["Adaptable"],
        "preferred_location": "Europe",
    }


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Create an initialized temporary database."""
    path = tmp_path / "test.db"
    init_database(path)
    return path


@pytest.fixture
def sessions(db_path):
    return session_factory(db_path)


@pytest.fixture
def profile_service(sessions, quiet_logger) -> ProfileService:
    return ProfileService(sessions, logger=quiet_logger)


@pytest.fixture
def match_service(sessions, quiet_logger) -> MatchService:
    return MatchService(sessions, logger=quiet_logger)
