"""
Match generation and lifecycle.

Responsibilities:
- Score a user's profile against every other profile.
- Upsert matches at or above the threshold, keyed by the unordered
  profile pair, inside one transaction per run.
- Read matches and move them through their status lifecycle.

Non-Responsibilities:
- No scoring rules (see scoring.py).
- No profile validation (see profiles.py).

Invariant:
At most one match row exists per unordered pair of profiles. Rescoring
refreshes the scores of that row and never touches its status.
"""

from typing import Any, Dict, List, Optional, Union

from .database import Match, MatchStatus, Profile, normalized_pair
from .errors import ErrorKind, MatchingError, forbidden, not_found, operational, precondition, validation
from .logger import StructuredLogger, get_logger
from .profiles import find_all_excluding, find_by_user
from .scoring import MATCH_THRESHOLD, MatchScore, score

SCORE_COLUMNS = {
    "industry": "industry_score",
    "skills": "skills_score",
    "founder_status": "founder_status_score",
    "commitment": "commitment_score",
    "financial": "financial_score",
    "personality": "personality_score",
    "location": "location_score",
}


def find_match_by_pair(session, profile_id_a: int, profile_id_b: int) -> Optional[Match]:
    """Look up the match for two profiles regardless of which one is founder A."""
    low, high = normalized_pair(profile_id_a, profile_id_b)
    return session.query(Match).filter_by(pair_low_id=low, pair_high_id=high).first()


def find_match_by_id(session, match_id: int) -> Optional[Match]:
    return session.get(Match, match_id)


def find_matches_for_profile(session, profile_id: int) -> List[Match]:
    """All matches the profile is part of, best first."""
    return (
        session.query(Match)
        .filter((Match.founder_a_id == profile_id) | (Match.founder_b_id == profile_id))
        .order_by(Match.overall_score.desc(), Match.id)
        .all()
    )


def apply_scores(match: Match, result: MatchScore) -> None:
    match.overall_score = result.overall
    for criterion, value in result.breakdown().items():
        setattr(match, SCORE_COLUMNS[criterion], value)


def match_to_response(match: Match, user_id: int) -> Dict[str, Any]:
    """Shape a match from the point of view of the calling user."""
    is_founder_a = match.founder_a.user_id == user_id
    own = match.founder_a if is_founder_a else match.founder_b
    other = match.founder_b if is_founder_a else match.founder_a

    response = {
        "id": match.id,
        "founder_id": own.id,
        "matched_founder_id": other.id,
        "overall_score": float(match.overall_score),
    }
    for column in SCORE_COLUMNS.values():
        response[column] = float(getattr(match, column))
    response["status"] = match.status
    response["created_at"] = match.created_at.isoformat() if match.created_at else None
    response["matched_founder_details"] = {
        "founder_status": other.founder_status,
        "skills": list(other.skills or []),
        "industry": other.industry,
        "years_experience": other.years_experience,
        "location": other.location,
    }
    return response


def _is_party(match: Match, user_id: int) -> bool:
    return user_id in (match.founder_a.user_id, match.founder_b.user_id)


def _resolve_own_profile(session, user_id: int, action: str) -> Profile:
    try:
        return find_by_user(session, user_id)
    except MatchingError as e:
        if e.kind is ErrorKind.NOT_FOUND:
            raise precondition(f"You must create a profile before {action}") from e
        raise


class MatchService:
    """
    Transactional match operations for an authenticated user id.

    Args:
        session_factory: callable returning a new SQLAlchemy session
        logger: StructuredLogger (default: the global logger)
        threshold: minimum overall score for a match to be stored
    """

    def __init__(
        self,
        session_factory,
        logger: Optional[StructuredLogger] = None,
        threshold: float = MATCH_THRESHOLD,
    ):
        self.session_factory = session_factory
        self.logger = logger or get_logger()
        self.threshold = threshold

    def generate_matches(self, user_id: int) -> List[Dict[str, Any]]:
        """
        Score the user against every other profile and upsert qualifying matches.

        The whole run is one transaction: either every qualifying pair is
        written or, on any failure, none is.

        Returns:
            Response dicts for created or refreshed matches, in candidate order
        """
        session = self.session_factory()
        try:
            own = _resolve_own_profile(session, user_id, "finding matches")
            candidates = find_all_excluding(session, user_id)
            if not candidates:
                self.logger.info("No candidates to score", user_id=user_id)
                return []

            own_snapshot = own.to_snapshot()
            upserted: List[Match] = []
            created = refreshed = 0

            for candidate in candidates:
                result = score(own_snapshot, candidate.to_snapshot())
                if not result.meets_threshold(self.threshold):
                    continue

                match = find_match_by_pair(session, own.id, candidate.id)
                if match is not None:
                    apply_scores(match, result)
                    refreshed += 1
                else:
                    low, high = normalized_pair(own.id, candidate.id)
                    match = Match(
                        founder_a=own,
                        founder_b=candidate,
                        pair_low_id=low,
                        pair_high_id=high,
                        status=MatchStatus.PENDING.value,
                    )
                    apply_scores(match, result)
                    session.add(match)
                    created += 1
                session.flush()
                upserted.append(match)

            session.commit()
        except MatchingError as e:
            session.rollback()
            self.logger.record_failure(e.kind.value)
            raise
        except Exception as e:
            session.rollback()
            self.logger.record_failure(ErrorKind.OPERATIONAL.value)
            self.logger.error("Match generation rolled back", user_id=user_id, error=str(e))
            raise operational(f"Failed to generate matches: {e}") from e
        finally:
            session.close()

        # committed rows stay loaded (expire_on_commit=False) after the session closes
        self.logger.record_generation_run(len(candidates))
        for _ in range(created):
            self.logger.record_match_created()
        for _ in range(refreshed):
            self.logger.record_match_updated()
        self.logger.info(
            "Matches generated",
            user_id=user_id,
            candidates=len(candidates),
            created=created,
            refreshed=refreshed,
        )
        return [match_to_response(match, user_id) for match in upserted]

    def get_matches(self, user_id: int) -> List[Dict[str, Any]]:
        """Every match involving the user's profile, highest overall score first."""
        session = self.session_factory()
        try:
            own = _resolve_own_profile(session, user_id, "viewing matches")
            return [match_to_response(m, user_id) for m in find_matches_for_profile(session, own.id)]
        except MatchingError as e:
            self.logger.record_failure(e.kind.value)
            raise
        except Exception as e:
            self.logger.record_failure(ErrorKind.OPERATIONAL.value)
            raise operational(f"Failed to retrieve matches: {e}") from e
        finally:
            session.close()

    def _load_for_party(self, session, match_id: int, user_id: int) -> Match:
        match = find_match_by_id(session, match_id)
        if match is None:
            raise not_found(f"Match with ID {match_id} not found")
        if not _is_party(match, user_id):
            raise forbidden("You do not have access to this match")
        return match

    def get_match(self, match_id: int, user_id: int) -> Dict[str, Any]:
        session = self.session_factory()
        try:
            return match_to_response(self._load_for_party(session, match_id, user_id), user_id)
        except MatchingError as e:
            self.logger.record_failure(e.kind.value)
            raise
        except Exception as e:
            self.logger.record_failure(ErrorKind.OPERATIONAL.value)
            raise operational(f"Failed to retrieve match: {e}") from e
        finally:
            session.close()

    def update_match_status(
        self,
        match_id: int,
        user_id: int,
        status: Union[str, MatchStatus],
    ) -> Dict[str, Any]:
        """
        Set a match's status on behalf of one of its parties.

        Accepting connects the pair straight away; there is no second
        acceptance from the other founder.
        """
        try:
            new_status = MatchStatus(status)
        except ValueError:
            self.logger.record_failure(ErrorKind.VALIDATION.value)
            raise validation(f"Invalid match status: {status!r}")

        session = self.session_factory()
        try:
            match = self._load_for_party(session, match_id, user_id)
            if new_status is MatchStatus.ACCEPTED:
                new_status = MatchStatus.CONNECTED
            previous = match.status
            match.status = new_status.value
            session.commit()

            self.logger.record_status_update()
            self.logger.info(
                "Match status updated",
                match_id=match_id,
                user_id=user_id,
                previous=previous,
                status=match.status,
            )
            return match_to_response(match, user_id)
        except MatchingError as e:
            session.rollback()
            self.logger.record_failure(e.kind.value)
            raise
        except Exception as e:
            session.rollback()
            self.logger.record_failure(ErrorKind.OPERATIONAL.value)
            raise operational(f"Failed to update match status: {e}") from e
        finally:
            session.close()
