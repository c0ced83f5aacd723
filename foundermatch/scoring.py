"""
Compatibility scoring between two founder profiles.

Responsibilities:
- Compute seven independent sub-scores in [0, 1].
- Combine them into a weighted overall score.

Non-Responsibilities:
- No database access.
- No threshold decisions.
- No vocabulary validation (unknown values simply fail to match).

Invariant:
Given identical inputs, score() always returns the same MatchScore and
never raises.
"""

from dataclasses import dataclass, field, asdict
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional

from .catalog import REMOTE_ONLY

WEIGHTS = MappingProxyType({
    "industry": 0.20,
    "skills": 0.20,
    "founder_status": 0.15,
    "commitment": 0.10,
    "financial": 0.10,
    "personality": 0.05,
    "location": 0.05,
})

MATCH_THRESHOLD = 0.60

_INVESTOR_TIERS = frozenset({
    "Can invest <$25K personally",
    "Can invest $25K-$100K personally",
    "Can invest >$100K personally",
})
_SEEKING_FUNDING = frozenset({"No personal investment, seeking external funding"})

COMPLEMENTARY_CONTRIBUTIONS = MappingProxyType({
    "Will self-fund/bootstrap": frozenset({"Will self-fund/bootstrap"}),
    "Can invest <$25K personally": _SEEKING_FUNDING,
    "Can invest $25K-$100K personally": _SEEKING_FUNDING,
    "Can invest >$100K personally": _SEEKING_FUNDING,
    "No personal investment, seeking external funding": _INVESTOR_TIERS,
    "Brings existing investor relationships": _SEEKING_FUNDING,
    "Prefers not to discuss until later stage": frozenset({"Prefers not to discuss until later stage"}),
    "Seeking co-founder with investment capability": _INVESTOR_TIERS,
    "Open to sweat equity arrangements": frozenset({"Open to sweat equity arrangements"}),
})

COMPLEMENTARY_TRAITS = MappingProxyType({
    "Visionary": frozenset({"Detail-oriented", "Execution-focused"}),
    "Detail-oriented": frozenset({"Visionary", "Strategic thinker"}),
    "Risk-taker": frozenset({"Methodical", "Analytical"}),
    "Analytical": frozenset({"Creative", "Risk-taker"}),
    "Creative": frozenset({"Analytical", "Process-driven"}),
    "Methodical": frozenset({"Risk-taker", "Adaptable"}),
    "Growth-oriented": frozenset({"Process-driven", "Methodical"}),
    "Process-driven": frozenset({"Visionary", "Creative"}),
    "People-focused": frozenset({"Execution-focused", "Analytical"}),
    "Execution-focused": frozenset({"Visionary", "Strategic thinker"}),
    "Strategic thinker": frozenset({"Detail-oriented", "Execution-focused"}),
    "Tactical executor": frozenset({"Visionary", "Strategic thinker"}),
    "Persistent": frozenset({"Adaptable"}),
    "Adaptable": frozenset({"Persistent"}),
    "Collaborative": frozenset({"Independent"}),
    "Independent": frozenset({"Collaborative"}),
})

REGION_BUCKETS = MappingProxyType({
    "US - West Coast": frozenset({"US - West Coast"}),
    "US - East Coast": frozenset({"US - East Coast"}),
    "US - Midwest": frozenset({"US - Midwest"}),
    "US - South": frozenset({"US - South"}),
    "Europe": frozenset({"Europe"}),
    "Asia": frozenset({"Asia"}),
    "Latin America": frozenset({"Latin America"}),
    "Africa": frozenset({"Africa"}),
    "Australia/Oceania": frozenset({"Australia/Oceania"}),
})

REGION_MATCH_SCORE = 0.7


@dataclass(frozen=True)
class ProfileSnapshot:
    """Read-only view of a founder profile as the scoring engine sees it."""

    user_id: Optional[int] = None
    founder_status: Optional[str] = None
    industry: Optional[str] = None
    current_occupation: Optional[str] = None
    years_experience: int = 0
    commitment_level: Optional[str] = None
    financial_contribution: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    personality_traits: List[str] = field(default_factory=list)
    location: Optional[str] = None
    preferred_skills: List[str] = field(default_factory=list)
    preferred_founder_type: Optional[str] = None
    preferred_industry: Optional[str] = None
    preferred_commitment_level: Optional[str] = None
    preferred_financial: Optional[str] = None
    preferred_personality_traits: List[str] = field(default_factory=list)
    preferred_location: Optional[str] = None


@dataclass(frozen=True)
class MatchScore:
    """Sub-scores plus their weighted overall score."""

    industry: float
    skills: float
    founder_status: float
    commitment: float
    financial: float
    personality: float
    location: float
    overall: float

    def breakdown(self) -> Dict[str, float]:
        """Return the seven sub-scores keyed by criterion."""
        scores = asdict(self)
        scores.pop("overall")
        return scores

    def meets_threshold(self, threshold: float = MATCH_THRESHOLD) -> bool:
        return self.overall >= threshold


def _items(value: Optional[Iterable[str]]) -> List[str]:
    return list(value) if value else []


def bidirectional_match(value_a: Any, preference_a: Any, value_b: Any, preference_b: Any) -> float:
    """Score 0, 0.5 or 1.0 for how many sides get what the other prefers."""
    hits = 0
    if value_a is not None and value_a == preference_b:
        hits += 1
    if value_b is not None and value_b == preference_a:
        hits += 1
    return hits / 2


def overlap(items: Optional[Iterable[str]], others: Optional[Iterable[str]]) -> float:
    """
    Shared distinct values normalised by the shorter raw list.

    Duplicates in either list raise the denominator without adding to the
    numerator, so lists should be de-duplicated before scoring.
    """
    items = _items(items)
    others = _items(others)
    if not items or not others:
        return 0.0
    shared = set(items) & set(others)
    return len(shared) / min(len(items), len(others))


def _complements(table, value_a: Any, value_b: Any) -> bool:
    return value_b in table.get(value_a, frozenset())


def industry_score(a, b) -> float:
    return bidirectional_match(a.industry, a.preferred_industry, b.industry, b.preferred_industry)


def founder_status_score(a, b) -> float:
    return bidirectional_match(
        a.founder_status, a.preferred_founder_type,
        b.founder_status, b.preferred_founder_type,
    )


def skills_score(a, b) -> float:
    """Average of what A offers B and what B offers A."""
    a_offers_b = overlap(a.skills, b.preferred_skills)
    b_offers_a = overlap(b.skills, a.preferred_skills)
    return (a_offers_b + b_offers_a) / 2


def commitment_score(a, b) -> float:
    a_satisfied = a.preferred_commitment_level is not None and a.preferred_commitment_level == b.commitment_level
    b_satisfied = b.preferred_commitment_level is not None and b.preferred_commitment_level == a.commitment_level
    if a_satisfied and b_satisfied:
        return 1.0
    if a_satisfied or b_satisfied:
        return 0.5
    return 0.0


def financial_score(a, b) -> float:
    forward = _complements(COMPLEMENTARY_CONTRIBUTIONS, a.financial_contribution, b.financial_contribution)
    backward = _complements(COMPLEMENTARY_CONTRIBUTIONS, b.financial_contribution, a.financial_contribution)
    if forward and backward:
        return 1.0
    if forward or backward:
        return 0.5
    return 0.0


def personality_score(a, b) -> float:
    """
    Balance shared traits against complementary ones.

    The complementary term counts every ordered pair (trait_a, trait_b) where
    trait_b complements trait_a, normalised by the shorter trait list. One
    trait can be complemented several times over, so the term is capped at 1.
    """
    traits_a = _items(a.personality_traits)
    traits_b = _items(b.personality_traits)
    shared = overlap(traits_a, traits_b)

    if not traits_a or not traits_b:
        return shared / 2

    complementary_pairs = sum(
        1
        for trait_a in traits_a
        for trait_b in traits_b
        if _complements(COMPLEMENTARY_TRAITS, trait_a, trait_b)
    )
    complementary = min(1.0, complementary_pairs / min(len(traits_a), len(traits_b)))
    return (shared + complementary) / 2


def location_score(a, b) -> float:
    if a.location == REMOTE_ONLY or b.location == REMOTE_ONLY:
        return 1.0
    if a.location is None or b.location is None:
        return 0.0
    if a.location == b.location:
        return 1.0
    if _complements(REGION_BUCKETS, a.location, b.location):
        return REGION_MATCH_SCORE
    return 0.0


def weighted_overall(breakdown: Dict[str, float]) -> float:
    """
    Fixed-weight linear combination of the seven sub-scores.

    The weights add up to 0.85, so a perfect match scores 0.85, not 1.0.
    """
    return sum(breakdown[name] * weight for name, weight in WEIGHTS.items())


def score(profile_a, profile_b) -> MatchScore:
    """
    Compute the compatibility of two profiles.

    Args:
        profile_a: ProfileSnapshot (or any object with the same attributes)
        profile_b: ProfileSnapshot for the candidate

    Returns:
        MatchScore with seven sub-scores and the weighted overall score
    """
    breakdown = {
        "industry": industry_score(profile_a, profile_b),
        "skills": skills_score(profile_a, profile_b),
        "founder_status": founder_status_score(profile_a, profile_b),
        "commitment": commitment_score(profile_a, profile_b),
        "financial": financial_score(profile_a, profile_b),
        "personality": personality_score(profile_a, profile_b),
        "location": location_score(profile_a, profile_b),
    }
    return MatchScore(overall=weighted_overall(breakdown), **breakdown)
