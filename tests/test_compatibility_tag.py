"""Tests for compatibility tag parsing, validation and predicates."""
import pytest
from packaging.tags import Tag

from distribution import (
    WILDCARD,
    CompatibilityTag,
    Concrete,
    InvalidCompatibilityTag,
    split_runtime_tag,
)


class TestParseParts:
    """parse_parts builds tags from the three textual parts."""

    def test_pure(self):
        tag = CompatibilityTag.parse_parts("py3", "none", "any")
        assert tag == CompatibilityTag(("py3",), WILDCARD, WILDCARD)

    def test_compressed_sets(self):
        tag = CompatibilityTag.parse_parts(
            "cp311", "cp311", "manylinux_2_17_x86_64.manylinux2014_x86_64"
        )
        assert tag.runtime_tags() == ["cp311"]
        assert tag.abi == Concrete(("cp311",))
        assert tag.platform_tags() == ["manylinux_2_17_x86_64", "manylinux2014_x86_64"]

    def test_wildcard_abi_concrete_platform(self):
        tag = CompatibilityTag.parse_parts("py3", "none", "win_amd64")
        assert tag.is_wildcard_abi()
        assert not tag.is_wildcard_platform()

    def test_concrete_abi_with_any_platform_rejected(self):
        assert CompatibilityTag.parse_parts("cp311", "cp311", "any") is None

    @pytest.mark.parametrize(
        "parts",
        [("", "none", "any"), ("py3", "", "any"), ("py3", "none", "")],
    )
    def test_empty_part_rejected(self, parts):
        assert CompatibilityTag.parse_parts(*parts) is None

    @pytest.mark.parametrize(
        "parts",
        [("py3", "cp3-11", "linux"), ("py3", "none", "linux/x86"), ("py3", "abi 3", "linux")],
    )
    def test_bad_characters_rejected(self, parts):
        assert CompatibilityTag.parse_parts(*parts) is None


class TestParseTag:
    """parse_tag splits at the first two dashes."""

    def test_round_trip(self):
        for raw in ("py3-none-any", "py2.py3-none-any", "cp311-abi3-win_amd64"):
            assert str(CompatibilityTag.parse_tag(raw)) == raw

    def test_too_few_parts(self):
        assert CompatibilityTag.parse_tag("py3-none") is None

    def test_extra_dash_ends_up_in_platform(self):
        assert CompatibilityTag.parse_tag("py3-none-any-extra") is None

    def test_from_string_raises(self):
        with pytest.raises(InvalidCompatibilityTag):
            CompatibilityTag.from_string("garbage")

    def test_from_string_ok(self):
        assert CompatibilityTag.from_string("py3-none-any").is_pure()


class TestConstruction:
    """The constructor refuses invalid combinations."""

    def test_concrete_abi_any_platform(self):
        with pytest.raises(InvalidCompatibilityTag):
            CompatibilityTag(("cp311",), Concrete(("cp311",)), WILDCARD)

    def test_empty_runtime(self):
        with pytest.raises(InvalidCompatibilityTag):
            CompatibilityTag(())

    def test_hashable_and_equal(self):
        a = CompatibilityTag.parse_tag("py3-none-any")
        b = CompatibilityTag.parse_tag("py3-none-any")
        assert a == b
        assert len({a, b}) == 1


class TestPredicates:
    """Universal, pure and wildcard predicates."""

    def test_universal(self):
        tag = CompatibilityTag.parse_tag("py2.py3-none-any")
        assert tag.is_universal()
        assert tag.is_pure()

    def test_single_runtime_is_not_universal(self):
        tag = CompatibilityTag.parse_tag("py3-none-any")
        assert not tag.is_universal()
        assert tag.is_pure()

    def test_reversed_runtime_is_not_universal(self):
        assert not CompatibilityTag.parse_tag("py3.py2-none-any").is_universal()

    def test_platform_specific(self):
        tag = CompatibilityTag.parse_tag("cp311-cp311-win_amd64")
        assert not tag.is_pure()
        assert not tag.is_wildcard_abi()
        assert not tag.is_wildcard_platform()

    def test_accessors_render_wildcards(self):
        tag = CompatibilityTag.parse_tag("py3-none-any")
        assert tag.abi_tags() == ["none"]
        assert tag.platform_tags() == ["any"]


class TestExpand:
    """expand gives the cartesian product as packaging tags."""

    def test_product(self):
        tag = CompatibilityTag.parse_tag("py2.py3-none-linux_x86_64.macosx_11_0_arm64")
        assert tag.expand() == frozenset(
            {
                Tag("py2", "none", "linux_x86_64"),
                Tag("py2", "none", "macosx_11_0_arm64"),
                Tag("py3", "none", "linux_x86_64"),
                Tag("py3", "none", "macosx_11_0_arm64"),
            }
        )


class TestSplitRuntimeTag:
    """Implementation prefix and version digits."""

    def test_cpython(self):
        assert split_runtime_tag("cp311") == ("cp", "311")

    def test_generic(self):
        assert split_runtime_tag("py3") == ("py", "3")

    def test_no_version(self):
        assert split_runtime_tag("py") == ("py", "")
