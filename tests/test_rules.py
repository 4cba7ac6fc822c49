"""Tests for exclusion rules and the merge algebra."""
from __future__ import annotations

import pytest

from key_exclusions import MERGED_RULE_PATTERN, Rule, RuleEntry, merge_commands, merge_keys


class TestMergeKeys:
    """merge_keys() unions two key strings into a normalized set."""

    def test_union(self) -> None:
        assert merge_keys("jk", "kl") == "jkl"

    def test_whitespace_stripped(self) -> None:
        """Spaces, tabs and newlines never become pass keys."""
        assert merge_keys("j k", "\tl\n") == "jkl"

    def test_none_is_empty(self) -> None:
        assert merge_keys(None, None) == ""
        assert merge_keys(None, "a") == "a"

    def test_order_independent(self) -> None:
        assert merge_keys("lkj", "") == merge_keys("", "jkl")

    def test_only_whitespace_is_empty(self) -> None:
        assert merge_keys("   ", " ") == ""


class TestMergeCommands:
    """merge_commands() unions two command sequences."""

    def test_first_seen_order(self) -> None:
        assert merge_commands(["b", "a"], ["a", "c", "b"]) == ("b", "a", "c")

    def test_none_is_empty(self) -> None:
        assert merge_commands(None, None) == ()
        assert merge_commands(None, ["<c-o>"]) == ("<c-o>",)


class TestRuleConstruction:
    """Rule normalizes every set field."""

    def test_defaults(self) -> None:
        rule = Rule()
        assert rule.pattern == ""
        assert rule.pass_keys == ""
        assert rule.pass_mappings == ()
        assert rule.allow_keys == ""
        assert rule.allow_mappings == ()

    def test_none_fields(self) -> None:
        """None reads as empty for every field."""
        rule = Rule(None, None, None, None, None)  # type: ignore[arg-type]
        assert rule.pass_keys == ""
        assert rule.pass_mappings == ()
        assert rule.allow_keys == ""
        assert rule.allow_mappings == ()

    def test_keys_deduplicated(self) -> None:
        rule = Rule("a.com", "k j k", allow_keys="x x")
        assert rule.pass_keys == "jk"
        assert rule.allow_keys == "x"

    def test_mappings_deduplicated(self) -> None:
        rule = Rule("a.com", "j", ["<c-o>", "<c-o>", "gg"])  # type: ignore[arg-type]
        assert rule.pass_mappings == ("<c-o>", "gg")

    def test_immutable(self) -> None:
        rule = Rule("a.com", "j")
        with pytest.raises(AttributeError):
            rule.pass_keys = "k"  # type: ignore[misc]


class TestRulePredicates:
    """Per-key and per-command checks."""

    @pytest.fixture()
    def rule(self) -> Rule:
        return Rule("a.com", "jk", ("<c-o>",), "x", ("gg",))

    def test_enabled_with_pass_keys(self, rule: Rule) -> None:
        assert rule.is_enabled()
        assert not rule.exclude_everything()

    def test_empty_pass_keys_excludes_everything(self) -> None:
        rule = Rule("a.com", "")
        assert rule.exclude_everything()
        assert not rule.is_enabled()

    def test_whitespace_pass_keys_excludes_everything(self) -> None:
        """Pass keys made only of whitespace normalize to empty."""
        assert Rule("a.com", "  ").exclude_everything()

    def test_ignore_key_char(self, rule: Rule) -> None:
        assert rule.ignore_key_char("j")
        assert not rule.ignore_key_char("x")

    def test_ignore_key_char_empty_string(self) -> None:
        """An empty string is a substring of any pass-key set."""
        assert Rule("a.com", "").ignore_key_char("")

    def test_ignore_mapping(self, rule: Rule) -> None:
        assert rule.ignore_mapping("<c-o>")
        assert not rule.ignore_mapping("gg")

    def test_force_include_key_char(self, rule: Rule) -> None:
        assert rule.force_include_key_char("x")
        assert not rule.force_include_key_char("j")

    def test_force_include_mapping(self, rule: Rule) -> None:
        assert rule.force_include_mapping("gg")
        assert not rule.force_include_mapping("<c-o>")


class TestMergeRule:
    """merge_rule() takes per-field unions."""

    @pytest.fixture()
    def a(self) -> Rule:
        return Rule("a.com", "jk", ("m1",), "x", ("a1",))

    @pytest.fixture()
    def b(self) -> Rule:
        return Rule("*.com", "kl", ("m2", "m1"), "y", ("a2",))

    def test_union(self, a: Rule, b: Rule) -> None:
        merged = a.merge_rule(b)
        assert merged.pass_keys == "jkl"
        assert merged.pass_mappings == ("m1", "m2")
        assert merged.allow_keys == "xy"
        assert merged.allow_mappings == ("a1", "a2")

    def test_synthetic_pattern(self, a: Rule, b: Rule) -> None:
        assert a.merge_rule(b).pattern == MERGED_RULE_PATTERN
        assert a.merge_rule(b, label="preview").pattern == "preview"

    def test_commutative(self, a: Rule, b: Rule) -> None:
        ab = a.merge_rule(b)
        ba = b.merge_rule(a)
        assert ab.pass_keys == ba.pass_keys
        assert set(ab.pass_mappings) == set(ba.pass_mappings)
        assert ab.allow_keys == ba.allow_keys
        assert set(ab.allow_mappings) == set(ba.allow_mappings)

    def test_idempotent(self, a: Rule) -> None:
        merged = a.merge_rule(a)
        assert merged.pass_keys == a.pass_keys
        assert merged.pass_mappings == a.pass_mappings
        assert merged.allow_keys == a.allow_keys
        assert merged.allow_mappings == a.allow_mappings

    def test_associative(self, a: Rule, b: Rule) -> None:
        c = Rule("c.com", "z", ("m3",))
        left = a.merge_rule(b).merge_rule(c)
        right = a.merge_rule(b.merge_rule(c))
        assert left == right

    def test_inputs_unchanged(self, a: Rule, b: Rule) -> None:
        a.merge_rule(b)
        assert a.pass_keys == "jk"
        assert b.pass_keys == "kl"


class TestRuleFromEntry:
    """Rules built from configured entries."""

    @pytest.fixture()
    def entry(self) -> RuleEntry:
        return RuleEntry.coerce(
            {
                "pattern": "*.example.com",
                "passKeys": "j k",
                "passMappings": ["<c-o>"],
                "allowKeys": "x",
                "allowMappings": ["gg"],
            }
        )

    def test_default_keeps_pass_keys_only(self, entry: RuleEntry) -> None:
        rule = Rule.from_entry(entry)
        assert rule.pattern == "*.example.com"
        assert rule.pass_keys == "jk"
        assert rule.pass_mappings == ()
        assert rule.allow_keys == ""
        assert rule.allow_mappings == ()

    def test_full_keeps_everything(self, entry: RuleEntry) -> None:
        rule = Rule.from_entry(entry, full=True)
        assert rule.pass_mappings == ("<c-o>",)
        assert rule.allow_keys == "x"
        assert rule.allow_mappings == ("gg",)

    def test_to_dict(self, entry: RuleEntry) -> None:
        assert Rule.from_entry(entry, full=True).to_dict() == {
            "pattern": "*.example.com",
            "passKeys": "jk",
            "passMappings": ["<c-o>"],
            "allowKeys": "x",
            "allowMappings": ["gg"],
        }
