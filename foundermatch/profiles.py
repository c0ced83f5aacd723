"""
Profile store.

Responsibilities:
- Look up the profile of record for a user and the candidate pool.
- Create, update and remove profiles with validation.

Non-Responsibilities:
- No scoring.
- No match persistence (match rows cascade when a profile is removed).
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from .database import Profile
from .errors import MatchingError, conflict, not_found, operational, validation
from .logger import StructuredLogger, get_logger
from .schema import clean_profile, validate_profile


def find_by_user(session, user_id: int) -> Profile:
    """Return the user's profile or raise a NOT_FOUND MatchingError."""
    profile = session.query(Profile).filter_by(user_id=user_id).first()
    if profile is None:
        raise not_found(f"Profile not found for user with ID {user_id}")
    return profile


def find_all_excluding(session, user_id: int) -> List[Profile]:
    """Every profile except the user's own, oldest first."""
    return (
        session.query(Profile)
        .filter(Profile.user_id != user_id)
        .order_by(Profile.id)
        .all()
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "founder_status": profile.founder_status,
        "skills": list(profile.skills or []),
        "industry": profile.industry,
        "current_occupation": profile.current_occupation,
        "years_experience": profile.years_experience,
        "commitment_level": profile.commitment_level,
        "financial_contribution": profile.financial_contribution,
        "personality_traits": list(profile.personality_traits or []),
        "location": profile.location,
        "preferred_skills": list(profile.preferred_skills or []),
        "preferred_founder_type": profile.preferred_founder_type,
        "preferred_industry": profile.preferred_industry,
        "preferred_commitment_level": profile.preferred_commitment_level,
        "preferred_financial": profile.preferred_financial,
        "preferred_personality_traits": list(profile.preferred_personality_traits or []),
        "preferred_location": profile.preferred_location,
        "created_at": profile.created_at.isoformat() if profile.created_at else None,
        "updated_at": profile.updated_at.isoformat() if profile.updated_at else None,
    }


class ProfileService:
    """Transactional profile operations for an authenticated user id."""

    def __init__(self, session_factory, logger: Optional[StructuredLogger] = None):
        self.session_factory = session_factory
        self.logger = logger or get_logger()

    def create(self, user_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        errors = validate_profile(payload)
        if errors:
            self.logger.warning("Rejected profile payload", user_id=user_id, errors=errors)
            raise validation("Invalid profile", errors)

        session = self.session_factory()
        try:
            existing = session.query(Profile).filter_by(user_id=user_id).first()
            if existing is not None:
                raise conflict("Profile already exists for this user")

            profile = Profile(user_id=user_id, **clean_profile(payload))
            session.add(profile)
            session.commit()
            self.logger.info("Profile created", user_id=user_id, profile_id=profile.id)
            return profile_to_dict(profile)
        except MatchingError:
            session.rollback()
            raise
        except IntegrityError as e:
            # lost a race against a concurrent create for the same user
            session.rollback()
            raise conflict("Profile already exists for this user") from e
        except Exception as e:
            session.rollback()
            raise operational(f"Failed to create profile: {e}") from e
        finally:
            session.close()

    def get(self, user_id: int) -> Dict[str, Any]:
        session = self.session_factory()
        try:
            return profile_to_dict(find_by_user(session, user_id))
        except MatchingError:
            raise
        except Exception as e:
            raise operational(f"Failed to retrieve profile: {e}") from e
        finally:
            session.close()

    def has_profile(self, user_id: int) -> bool:
        session = self.session_factory()
        try:
            return session.query(Profile).filter_by(user_id=user_id).first() is not None
        except Exception as e:
            raise operational(f"Failed to look up profile: {e}") from e
        finally:
            session.close()

    def update(self, user_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update; only the supplied fields are validated."""
        errors = validate_profile(changes, partial=True)
        if errors:
            raise validation("Invalid profile update", errors)

        session = self.session_factory()
        try:
            profile = find_by_user(session, user_id)
            for field, value in clean_profile(changes).items():
                setattr(profile, field, value)
            session.commit()
            self.logger.info("Profile updated", user_id=user_id, fields=sorted(changes))
            return profile_to_dict(profile)
        except MatchingError:
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            raise operational(f"Failed to update profile: {e}") from e
        finally:
            session.close()

    def remove(self, user_id: int) -> None:
        """Delete the user's profile; their matches go with it."""
        session = self.session_factory()
        try:
            profile = find_by_user(session, user_id)
            session.delete(profile)
            session.commit()
            self.logger.info("Profile removed", user_id=user_id)
        except MatchingError:
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            raise operational(f"Failed to delete profile: {e}") from e
        finally:
            session.close()
