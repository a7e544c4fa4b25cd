"""Tests for weight profile validation."""

import math

import pytest

from storefront.profiles import FULL_SEARCH_PROFILE, SUGGESTION_PROFILE, SearchProfile, WeightedField


class TestBuiltInProfiles:

    def test_full_search_weights(self):
        weights = {f.key: f.weight for f in FULL_SEARCH_PROFILE.fields}
        assert weights == {"name": 2.0, "brand_name": 1.5, "processor": 1.0, "description": 0.5}
        assert FULL_SEARCH_PROFILE.threshold == 0.4
        assert FULL_SEARCH_PROFILE.limit is None

    def test_suggestion_weights(self):
        weights = {f.key: f.weight for f in SUGGESTION_PROFILE.fields}
        assert weights == {"name": 2.0, "brand_name": 1.5}
        assert SUGGESTION_PROFILE.threshold == 0.4
        assert SUGGESTION_PROFILE.min_match_length == 2
        assert SUGGESTION_PROFILE.limit == 8

    def test_profiles_are_immutable(self):
        with pytest.raises(AttributeError):
            FULL_SEARCH_PROFILE.threshold = 0.9


class TestValidation:

    @pytest.mark.parametrize("weight", [0, -1.0, math.inf, math.nan, "2"])
    def test_bad_weight(self, weight):
        with pytest.raises(ValueError):
            WeightedField("name", weight)

    def test_empty_key(self):
        with pytest.raises(ValueError):
            WeightedField("", 1.0)

    def test_no_fields(self):
        with pytest.raises(ValueError):
            SearchProfile(name="empty", fields=())

    def test_duplicate_keys(self):
        with pytest.raises(ValueError):
            SearchProfile.from_weights("dup", [("name", 1.0), ("name", 2.0)])

    @pytest.mark.parametrize(
        "kwargs",
        [{"threshold": -0.1}, {"threshold": 1.5}, {"min_match_length": 0}, {"limit": 0}],
    )
    def test_bad_parameters(self, kwargs):
        with pytest.raises(ValueError):
            SearchProfile.from_weights("bad", [("name", 1.0)], **kwargs)

    def test_custom_profile(self):
        brand_only = SearchProfile.from_weights("brand_only", [("brand_name", 1.0)], limit=3)
        assert brand_only.fields == (WeightedField("brand_name", 1.0),)
        assert brand_only.limit == 3
