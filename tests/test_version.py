"""
Tests for VersionId — normalization, lenient parsing, ordering.
"""

import itertools

import pytest

from gvm.core.errors import VersionParseError
from gvm.core.models.version import (
    VersionId,
    bare_number,
    compare,
    normalize,
    parse_triple,
)


class TestNormalize:
    def test_adds_prefix(self):
        assert normalize("1.22.11") == "go1.22.11"

    def test_keeps_existing_prefix(self):
        assert normalize("go1.22.11") == "go1.22.11"

    def test_accepts_anything(self):
        assert normalize("banana") == "gobanana"
        assert normalize("") == "go"

    def test_strips_whitespace(self):
        assert normalize("  1.21.0\n") == "go1.21.0"

    def test_custom_prefix(self):
        assert normalize("3.12", prefix="python") == "python3.12"


class TestBareNumber:
    def test_strips_prefix(self):
        assert bare_number("go1.22.11") == "1.22.11"

    def test_unprefixed_unchanged(self):
        assert bare_number("1.22.11") == "1.22.11"

    @pytest.mark.parametrize("s", ["1.22.11", "go1.22.11", "1.9.0", "go1.10"])
    def test_normalize_round_trip(self, s):
        assert parse_triple(bare_number(normalize(s))) == parse_triple(bare_number(s))


class TestParseTriple:
    def test_full(self):
        assert parse_triple("1.22.11") == (1, 22, 11)

    def test_missing_patch_defaults_zero(self):
        assert parse_triple("1.22") == (1, 22, 0)

    def test_missing_minor_and_patch(self):
        assert parse_triple("1") == (1, 0, 0)

    def test_prerelease_suffix_zeroes_component(self):
        assert parse_triple("1.22rc1") == (1, 0, 0)
        assert parse_triple("1.21.0beta") == (1, 21, 0)

    def test_garbage_is_zero(self):
        assert parse_triple("") == (0, 0, 0)
        assert parse_triple("a.b.c") == (0, 0, 0)
        assert parse_triple("1.") == (1, 0, 0)

    def test_negative_is_not_unsigned(self):
        assert parse_triple("1.-2.3") == (1, 0, 3)

    def test_overflow_is_zero(self):
        assert parse_triple("1.99999999999.0") == (1, 0, 0)

    def test_extra_components_ignored(self):
        assert parse_triple("1.2.3.4") == (1, 2, 3)

    def test_strict_rejects_unparsable(self):
        with pytest.raises(VersionParseError):
            parse_triple("1.22rc1", strict=True)

    def test_strict_allows_missing(self):
        assert parse_triple("1.22", strict=True) == (1, 22, 0)


class TestCompare:
    def test_numeric_not_lexicographic(self):
        assert compare("1.9.0", "1.10.0") == -1
        assert compare("1.10.0", "1.9.0") == 1

    def test_equal(self):
        assert compare("1.22", "1.22.0") == 0

    def test_total_order(self):
        samples = ["1.9.0", "1.10.0", "1.10", "1.2.3", "2.0", "0.9.9", "1.22rc1"]
        for a, b in itertools.product(samples, repeat=2):
            assert compare(a, b) == -compare(b, a)
        for a, b, c in itertools.product(samples, repeat=3):
            if compare(a, b) <= 0 and compare(b, c) <= 0:
                assert compare(a, c) <= 0


class TestVersionId:
    def test_parse(self):
        v = VersionId.parse("1.22.11")
        assert v.triple == (1, 22, 11)
        assert v.canonical == "go1.22.11"
        assert v.number == "1.22.11"
        assert str(v) == "go1.22.11"

    def test_equality_ignores_prefix_and_text(self):
        assert VersionId.parse("1.22") == VersionId.parse("go1.22.0")
        assert hash(VersionId.parse("1.22")) == hash(VersionId.parse("go1.22.0"))

    def test_sorting(self):
        versions = [VersionId.parse(s) for s in ["1.10.0", "1.9.3", "go1.21.5", "1.2"]]
        assert [v.number for v in sorted(versions)] == ["1.2", "1.9.3", "1.10.0", "1.21.5"]

    def test_immutable(self):
        v = VersionId.parse("1.22.0")
        with pytest.raises(AttributeError):
            v.major = 2  # type: ignore[misc]

    def test_strict_parse(self):
        with pytest.raises(VersionParseError):
            VersionId.parse("go1.22rc1", strict=True)
