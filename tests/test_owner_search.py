"""
Tests for owner search strategy selection and predicates
"""

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from powerplant_service.models import PowerPlantRecord
from powerplant_service.search.owner_search import (
    BackendCapabilities,
    OwnerFilter,
    OwnerMatchStrategy,
    build_owner_filter,
    escape_like,
    select_owner_strategy,
)


class TestStrategySelection:
    """Test strategy choice from backend capabilities"""

    @pytest.mark.parametrize(
        "accent, pattern, expected",
        [
            (True, True, OwnerMatchStrategy.ACCENT_FOLDING_PATTERN_MATCH),
            (False, True, OwnerMatchStrategy.PLAIN_PATTERN_MATCH),
            (False, False, OwnerMatchStrategy.NAIVE_CONTAINMENT),
            (True, False, OwnerMatchStrategy.NAIVE_CONTAINMENT),
        ],
    )
    def test_select(self, accent, pattern, expected):
        """Richest supported strategy wins"""
        capabilities = BackendCapabilities(
            supports_accent_folding=accent, supports_pattern_match=pattern
        )
        assert select_owner_strategy(capabilities) is expected

    def test_default_capabilities(self):
        """A backend with no features gets naive containment"""
        assert (
            select_owner_strategy(BackendCapabilities())
            is OwnerMatchStrategy.NAIVE_CONTAINMENT
        )


class TestBuildOwnerFilter:
    """Test filter construction"""

    @pytest.mark.parametrize("owner", [None, "", "   "])
    def test_blank_means_no_filter(self, owner):
        """Missing or blank owner matches everything"""
        assert build_owner_filter(owner, OwnerMatchStrategy.PLAIN_PATTERN_MATCH) is None

    def test_filter_keeps_text_and_strategy(self):
        """Filter is bound to its strategy"""
        owner_filter = build_owner_filter("Jane", OwnerMatchStrategy.NAIVE_CONTAINMENT)
        assert owner_filter == OwnerFilter("Jane", OwnerMatchStrategy.NAIVE_CONTAINMENT)


class TestLikeEscaping:
    """Test wildcard escaping"""

    def test_escape_wildcards(self):
        """% and _ match literally"""
        assert escape_like("50%_off") == "50!%!_off"

    def test_escape_escape_character(self):
        """The escape character itself is doubled"""
        assert escape_like("Hi!") == "Hi!!"

    def test_pattern_is_contains(self):
        """Pattern wraps the escaped text in wildcards"""
        owner_filter = OwnerFilter("a_b", OwnerMatchStrategy.PLAIN_PATTERN_MATCH)
        assert owner_filter.pattern == "%a!_b%"


class TestNaiveContainment:
    """Test the in-application predicate"""

    @pytest.mark.parametrize(
        "text, owner, expected",
        [
            ("Jane", "Jane Doe", True),
            ("jane", "Jane Doe", True),
            ("DOE", "Jane Doe", True),
            ("e D", "Jane Doe", True),
            ("John", "Jane Doe", False),
            ("%", "Jane Doe", False),
            ("straße", "Anna STRASSE", True),
        ],
    )
    def test_matches(self, text, owner, expected):
        """Case-insensitive substring test"""
        owner_filter = OwnerFilter(text, OwnerMatchStrategy.NAIVE_CONTAINMENT)
        assert owner_filter.matches(owner) is expected


class TestSqlClauses:
    """Test SQL rendering of the pattern strategies"""

    def test_accent_folding_clause(self):
        """Both sides go through unaccent() before ILIKE"""
        owner_filter = OwnerFilter("José", OwnerMatchStrategy.ACCENT_FOLDING_PATTERN_MATCH)
        compiled = owner_filter.to_clause(PowerPlantRecord.owner).compile(
            dialect=postgresql.dialect()
        )
        sql = str(compiled)
        assert "unaccent(power_plants.owner) ILIKE unaccent(" in sql
        assert "%José%" in compiled.params.values()

    def test_plain_pattern_clause(self):
        """ILIKE without accent folding"""
        owner_filter = OwnerFilter("Jane", OwnerMatchStrategy.PLAIN_PATTERN_MATCH)
        compiled = owner_filter.to_clause(PowerPlantRecord.owner).compile(
            dialect=postgresql.dialect()
        )
        sql = str(compiled)
        assert "power_plants.owner ILIKE" in sql
        assert "unaccent" not in sql
        assert "%Jane%" in compiled.params.values()

    def test_plain_pattern_clause_on_sqlite(self):
        """SQLite gets the lower() LIKE lower() emulation"""
        owner_filter = OwnerFilter("Jane", OwnerMatchStrategy.PLAIN_PATTERN_MATCH)
        sql = str(
            owner_filter.to_clause(PowerPlantRecord.owner).compile(dialect=sqlite.dialect())
        )
        assert "lower(power_plants.owner) LIKE lower(" in sql

    def test_naive_has_no_sql_form(self):
        """Naive containment cannot be pushed to SQL"""
        owner_filter = OwnerFilter("Jane", OwnerMatchStrategy.NAIVE_CONTAINMENT)
        with pytest.raises(ValueError):
            owner_filter.to_clause(PowerPlantRecord.owner)
