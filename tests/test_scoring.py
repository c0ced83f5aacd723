"""
Tests for the compatibility scoring engine.
"""

import itertools
from dataclasses import FrozenInstanceError

import pytest

from foundermatch import scoring
from foundermatch.catalog import FINANCIAL_CONTRIBUTIONS, PERSONALITY_TRAITS, REGIONS
from foundermatch.scoring import (
    COMPLEMENTARY_CONTRIBUTIONS,
    COMPLEMENTARY_TRAITS,
    MATCH_THRESHOLD,
    REGION_BUCKETS,
    WEIGHTS,
    MatchScore,
    ProfileSnapshot,
    bidirectional_match,
    commitment_score,
    financial_score,
    location_score,
    overlap,
    personality_score,
    score,
    skills_score,
    weighted_overall,
)


def snapshot(data) -> ProfileSnapshot:
    return ProfileSnapshot(**data)


@pytest.fixture
def founder_a(technical_founder):
    return snapshot(technical_founder)


@pytest.fixture
def founder_b(business_founder):
    return snapshot(business_founder)


@pytest.fixture
def founder_c(unrelated_founder):
    return snapshot(unrelated_founder)


class TestWeights:
    """Test the fixed weighting."""

    def test_weights_sum(self):
        """The fixed weights add up to 0.85, not 1.0."""
        assert sum(WEIGHTS.values()) == pytest.approx(0.85)

    def test_weights_are_read_only(self):
        with pytest.raises(TypeError):
            WEIGHTS["industry"] = 0.5

    def test_threshold(self):
        assert MATCH_THRESHOLD == 0.60

    def test_overall_is_weighted_sum(self, founder_a, founder_b, founder_c):
        """Overall equals the fixed linear combination for any pair."""
        for a, b in itertools.permutations([founder_a, founder_b, founder_c], 2):
            result = score(a, b)
            expected = (
                0.20 * result.industry
                + 0.20 * result.skills
                + 0.15 * result.founder_status
                + 0.10 * result.commitment
                + 0.10 * result.financial
                + 0.05 * result.personality
                + 0.05 * result.location
            )
            assert result.overall == pytest.approx(expected)

    def test_weighted_overall_of_arbitrary_vector(self):
        breakdown = {
            "industry": 0.5,
            "skills": 0.25,
            "founder_status": 1.0,
            "commitment": 0.0,
            "financial": 0.5,
            "personality": 0.75,
            "location": 0.7,
        }
        assert weighted_overall(breakdown) == pytest.approx(
            0.1 + 0.05 + 0.15 + 0.0 + 0.05 + 0.0375 + 0.035
        )

    def test_perfect_vector_scores_weight_total(self):
        """A perfect match reaches the weight total, 0.85."""
        assert weighted_overall({name: 1.0 for name in WEIGHTS}) == pytest.approx(0.85)


class TestEndToEndExample:
    """Test the worked example of two mirrored founders."""

    def test_mirrored_founders_score_above_threshold(self, founder_a, founder_b):
        result = score(founder_a, founder_b)

        assert result.industry == 1.0
        assert result.skills == 1.0
        assert result.founder_status == 1.0
        assert result.commitment == 1.0
        assert result.financial == 1.0
        assert result.personality == 0.5
        assert result.location == 1.0
        assert result.overall == pytest.approx(0.825)
        assert result.meets_threshold()

    def test_unrelated_founders_score_low(self, founder_a, founder_c):
        result = score(founder_a, founder_c)

        # only the remote-only location earns credit
        assert result.location == 1.0
        assert result.overall == pytest.approx(0.05)
        assert not result.meets_threshold()

    def test_breakdown_excludes_overall(self, founder_a, founder_b):
        breakdown = score(founder_a, founder_b).breakdown()
        assert set(breakdown) == set(WEIGHTS)


class TestBounds:
    """Test that every score stays within [0, 1]."""

    def test_all_scores_in_unit_interval(self, founder_a, founder_b, founder_c):
        profiles = [founder_a, founder_b, founder_c, ProfileSnapshot()]
        for a, b in itertools.product(profiles, repeat=2):
            result = score(a, b)
            for value in list(result.breakdown().values()) + [result.overall]:
                assert 0.0 <= value <= 1.0

    def test_empty_profiles_score_zero(self):
        result = score(ProfileSnapshot(), ProfileSnapshot())
        assert result.overall == 0.0

    def test_personality_complementary_term_is_capped(self):
        a = ProfileSnapshot(personality_traits=["Visionary"])
        b = ProfileSnapshot(personality_traits=["Detail-oriented", "Execution-focused"])
        # two complementary pairs over a min length of 1 would be 2.0 uncapped
        assert personality_score(a, b) == 0.5


class TestSymmetry:
    """Test that swapping the profiles does not change the score."""

    def test_score_symmetric(self, founder_a, founder_b, founder_c):
        for a, b in itertools.combinations([founder_a, founder_b, founder_c], 2):
            assert score(a, b) == score(b, a)


class TestBidirectionalMatch:
    """Test the categorical matcher used for industry and founder status."""

    @pytest.mark.parametrize("value_a,pref_a,value_b,pref_b,expected", [
        ("Tech", "Tech", "Tech", "Tech", 1.0),
        ("Tech", "Finance", "Tech", "Tech", 0.5),
        ("Tech", "Tech", "Finance", "Finance", 0.0),
        ("Tech", "Healthcare", "Healthcare", "Tech", 1.0),
        (None, None, None, None, 0.0),
    ])
    def test_bidirectional_values(self, value_a, pref_a, value_b, pref_b, expected):
        assert bidirectional_match(value_a, pref_a, value_b, pref_b) == expected


class TestSkills:
    """Test skill overlap scoring."""

    def test_empty_skills_score_zero(self, founder_b):
        a = ProfileSnapshot(skills=[], preferred_skills=[])
        assert skills_score(a, founder_b) == 0.0

    def test_one_direction_only(self):
        a = ProfileSnapshot(skills=["Engineering"], preferred_skills=["Sales"])
        b = ProfileSnapshot(skills=["Marketing"], preferred_skills=["Engineering"])
        assert skills_score(a, b) == 0.5

    def test_overlap_normalized_by_shorter_list(self):
        assert overlap(["Engineering", "Design", "Product"], ["Design"]) == 1.0
        assert overlap(["Engineering", "Design"], ["Design", "Sales"]) == 0.5

    def test_duplicates_raise_denominator(self):
        assert overlap(["Engineering", "Engineering"], ["Engineering", "Design"]) == 0.5

    def test_overlap_handles_none(self):
        assert overlap(None, ["Design"]) == 0.0


class TestCommitment:
    """Test commitment level scoring."""

    def test_mutual(self):
        a = ProfileSnapshot(commitment_level="Full-time", preferred_commitment_level="Part-time")
        b = ProfileSnapshot(commitment_level="Part-time", preferred_commitment_level="Full-time")
        assert commitment_score(a, b) == 1.0

    def test_one_sided(self):
        a = ProfileSnapshot(commitment_level="Full-time", preferred_commitment_level="Full-time")
        b = ProfileSnapshot(commitment_level="Full-time", preferred_commitment_level="Part-time")
        assert commitment_score(a, b) == 0.5

    def test_none(self):
        a = ProfileSnapshot(commitment_level="Flexible", preferred_commitment_level="Full-time")
        b = ProfileSnapshot(commitment_level="Part-time", preferred_commitment_level="Weekends only")
        assert commitment_score(a, b) == 0.0


class TestFinancial:
    """Test the financial complementarity table and scoring."""

    def test_table_covers_vocabulary(self):
        assert set(COMPLEMENTARY_CONTRIBUTIONS) == set(FINANCIAL_CONTRIBUTIONS)
        for targets in COMPLEMENTARY_CONTRIBUTIONS.values():
            assert targets <= set(FINANCIAL_CONTRIBUTIONS)

    def test_table_entries(self):
        tiers = {
            "Can invest <$25K personally",
            "Can invest $25K-$100K personally",
            "Can invest >$100K personally",
        }
        seeking = {"No personal investment, seeking external funding"}
        assert COMPLEMENTARY_CONTRIBUTIONS["No personal investment, seeking external funding"] == tiers
        assert COMPLEMENTARY_CONTRIBUTIONS["Seeking co-founder with investment capability"] == tiers
        for tier in tiers:
            assert COMPLEMENTARY_CONTRIBUTIONS[tier] == seeking
        assert COMPLEMENTARY_CONTRIBUTIONS["Brings existing investor relationships"] == seeking
        for self_only in (
            "Will self-fund/bootstrap",
            "Prefers not to discuss until later stage",
            "Open to sweat equity arrangements",
        ):
            assert COMPLEMENTARY_CONTRIBUTIONS[self_only] == {self_only}

    @pytest.mark.parametrize("a,b,expected", [
        ("Can invest >$100K personally", "No personal investment, seeking external funding", 1.0),
        ("Will self-fund/bootstrap", "Will self-fund/bootstrap", 1.0),
        ("Brings existing investor relationships", "No personal investment, seeking external funding", 0.5),
        ("Seeking co-founder with investment capability", "Can invest <$25K personally", 0.5),
        ("Open to sweat equity arrangements", "Will self-fund/bootstrap", 0.0),
        ("Not in the vocabulary", "Will self-fund/bootstrap", 0.0),
    ])
    def test_financial_scores(self, a, b, expected):
        pa = ProfileSnapshot(financial_contribution=a)
        pb = ProfileSnapshot(financial_contribution=b)
        assert financial_score(pa, pb) == expected
        assert financial_score(pb, pa) == expected


class TestPersonality:
    """Test personality scoring."""

    def test_trait_table_covers_vocabulary(self):
        assert set(COMPLEMENTARY_TRAITS) == set(PERSONALITY_TRAITS)
        for targets in COMPLEMENTARY_TRAITS.values():
            assert targets <= set(PERSONALITY_TRAITS)

    def test_shared_traits_only(self):
        a = ProfileSnapshot(personality_traits=["Persistent"])
        b = ProfileSnapshot(personality_traits=["Persistent"])
        assert personality_score(a, b) == 0.5

    def test_shared_and_complementary(self):
        a = ProfileSnapshot(personality_traits=["Persistent", "Collaborative"])
        b = ProfileSnapshot(personality_traits=["Persistent", "Independent"])
        # overlap 1/2, complementary pairs: Collaborative -> Independent = 1/2
        assert personality_score(a, b) == 0.5

    def test_empty_traits(self):
        a = ProfileSnapshot(personality_traits=[])
        b = ProfileSnapshot(personality_traits=["Visionary"])
        assert personality_score(a, b) == 0.0


class TestLocation:
    """Test location scoring."""

    @pytest.mark.parametrize("other", REGIONS + ["Remote only", None])
    def test_remote_only_matches_anything(self, other):
        remote = ProfileSnapshot(location="Remote only")
        elsewhere = ProfileSnapshot(location=other)
        assert location_score(remote, elsewhere) == 1.0
        assert location_score(elsewhere, remote) == 1.0

    def test_exact_match(self):
        a = ProfileSnapshot(location="Europe")
        assert location_score(a, ProfileSnapshot(location="Europe")) == 1.0

    def test_different_regions(self):
        a = ProfileSnapshot(location="Europe")
        assert location_score(a, ProfileSnapshot(location="Asia")) == 0.0

    def test_region_bucket_gives_partial_credit(self, monkeypatch):
        monkeypatch.setattr(scoring, "REGION_BUCKETS", {
            "US - West Coast": frozenset({"US - West Coast", "US - South"}),
        })
        a = ProfileSnapshot(location="US - West Coast")
        b = ProfileSnapshot(location="US - South")
        assert location_score(a, b) == 0.7

    def test_region_table_maps_each_region_to_itself(self):
        assert set(REGION_BUCKETS) == set(REGIONS)
        for region, bucket in REGION_BUCKETS.items():
            assert bucket == {region}


class TestMatchScore:
    """Test the MatchScore value object."""

    def _score(self, overall):
        return MatchScore(
            industry=0.0, skills=0.0, founder_status=0.0, commitment=0.0,
            financial=0.0, personality=0.0, location=0.0, overall=overall,
        )

    def test_threshold_is_inclusive(self):
        assert self._score(0.60).meets_threshold()

    def test_just_below_threshold(self):
        assert not self._score(0.5999).meets_threshold()

    def test_immutable(self):
        with pytest.raises(FrozenInstanceError):
            self._score(0.5).overall = 1.0
