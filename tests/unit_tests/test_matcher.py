"""
Namespace filter matching tests.

Covers token splitting, include/exclude precedence, glob translation and
degenerate specs.
"""

from __future__ import annotations

import pytest

from sandlog.matcher import FilterSpec, glob_to_regex, is_enabled, parse_filter_spec


class TestIncludes:
    """Include pattern tests"""

    def test_listed_namespaces_are_enabled(self) -> None:
        """Comma separated names enable exactly those namespaces"""
        assert is_enabled("db", "db,api")
        assert is_enabled("api", "db,api")
        assert not is_enabled("http", "db,api")

    def test_whitespace_and_commas_both_split(self) -> None:
        """Whitespace, commas and runs of both are separators"""
        spec = "db  api,\thttp , , worker"
        for namespace in ("db", "api", "http", "worker"):
            assert is_enabled(namespace, spec)

    def test_match_is_anchored(self) -> None:
        """A plain name does not match longer namespaces"""
        assert not is_enabled("db:query", "db")
        assert not is_enabled("mydb", "db")

    def test_trailing_newline_does_not_match(self) -> None:
        """A namespace with a trailing newline is a different namespace"""
        assert not is_enabled("db\n", "db")
        assert not is_enabled("db:query\n", "db:*")

    def test_match_is_case_sensitive(self) -> None:
        """Namespaces are not normalized"""
        assert not is_enabled("DB", "db")


class TestWildcards:
    """Glob wildcard tests"""

    @pytest.mark.parametrize("namespace", ["app", "db:query", "a", "x.y-z"])
    def test_star_enables_everything(self, namespace: str) -> None:
        """'*' enables every non-empty namespace"""
        assert is_enabled(namespace, "*")

    def test_prefix_wildcard(self) -> None:
        """'db:*' matches children of db but not db itself"""
        assert is_enabled("db:query", "db:*")
        assert is_enabled("db:pool:checkout", "db:*")
        assert not is_enabled("db", "db:*")

    def test_infix_wildcard(self) -> None:
        """'*' may appear in the middle of a pattern"""
        assert is_enabled("api:v1:users", "api:*:users")
        assert not is_enabled("api:v1:orders", "api:*:users")

    def test_regex_metacharacters_are_literal(self) -> None:
        """Only '*' is special; dots and brackets match themselves"""
        assert is_enabled("svc.core", "svc.core")
        assert not is_enabled("svcXcore", "svc.core")
        assert is_enabled("job[1]", "job[1]")
        assert not is_enabled("job1", "job[1]")

    def test_glob_to_regex_translation(self) -> None:
        """Translated regex is anchored and non-greedy"""
        assert glob_to_regex("db:*").pattern == r"^db:.*?\Z"


class TestExcludes:
    """Exclude pattern tests"""

    def test_exclude_wins_over_wildcard_include(self) -> None:
        """'-db:secret' hides db:secret even though '*' includes it"""
        spec = "*,-db:secret"
        assert not is_enabled("db:secret", spec)
        assert is_enabled("db:query", spec)

    def test_exclude_wins_regardless_of_order(self) -> None:
        """Excludes are evaluated before includes no matter where they appear"""
        assert not is_enabled("db:secret", "-db:secret db:secret")
        assert not is_enabled("db:secret", "db:secret -db:secret")

    def test_exclude_only_enables_nothing(self) -> None:
        """Without includes nothing is enabled"""
        assert not is_enabled("api", "-db")

    def test_wildcard_exclude(self) -> None:
        """Excludes accept globs too"""
        spec = "*,-db:*"
        assert not is_enabled("db:query", spec)
        assert is_enabled("api", spec)


class TestDegenerateSpecs:
    """Empty and malformed specs"""

    @pytest.mark.parametrize("spec", ["", "   ", ",,,", " , \n"])
    def test_empty_spec_enables_nothing(self, spec: str) -> None:
        """Empty specs disable every namespace"""
        assert not is_enabled("app", spec)
        assert parse_filter_spec(spec).is_empty

    def test_none_is_treated_as_empty(self) -> None:
        """A missing spec parses to no rules"""
        assert parse_filter_spec(None) == FilterSpec()  # type: ignore[arg-type]

    def test_stray_dash_is_ignored(self) -> None:
        """A lone '-' yields an empty pattern and is dropped"""
        parsed = parse_filter_spec("- db")
        assert parsed.excludes == ()
        assert len(parsed.includes) == 1
        assert is_enabled("db", "- db")

    def test_double_dash_excludes_dash_prefixed_name(self) -> None:
        """Only the first '-' is stripped"""
        parsed = parse_filter_spec("--odd")
        assert len(parsed.excludes) == 1
        assert parsed.excludes[0].match("-odd")

    def test_parse_is_cached(self) -> None:
        """Identical spec strings share a parsed result"""
        assert parse_filter_spec("a,b") is parse_filter_spec("a,b")
