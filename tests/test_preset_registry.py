"""Tests for preset merging and resolution."""

import re

from pyqt_formlayout.layout import Preset, PresetRegistry, literal, predicate


def test_resolves_zip_code_by_pattern():
    registry = PresetRegistry.from_config()
    preset = registry.resolve("zipCode")
    assert preset.key == "zip"
    assert preset.span == 1
    assert preset.group == "address"


def test_explicit_key_beats_name_and_patterns():
    registry = PresetRegistry.from_config()
    assert registry.resolve("zipCode", "City").key == "city"


def test_unknown_explicit_key_falls_through():
    registry = PresetRegistry.from_config()
    assert registry.resolve("zipCode", "nope").key == "zip"


def test_exact_name_beats_pattern_scan():
    # Key lookup wins over the pattern scan
    registry = PresetRegistry([
        Preset("contact", (literal("phone"),), span=3),
        Preset("phone", (literal("nothing"),), span=2),
    ])
    assert registry.resolve("Phone").key == "phone"


def test_scan_is_first_match_in_registration_order():
    registry = PresetRegistry([
        Preset("first", (literal("name"),)),
        Preset("second", (literal("name"),)),
    ])
    assert registry.resolve("username").key == "first"


def test_bracketed_name_collides_with_flat_key():
    registry = PresetRegistry([Preset("addressline1", (), span="full")])
    assert registry.resolve("address[line1]").key == "addressline1"


def test_address_line_matches_by_regex():
    registry = PresetRegistry.from_config()
    assert registry.resolve("billingStreet").key == "address_line"


def test_no_match_returns_none():
    assert PresetRegistry.from_config().resolve("favouriteColour") is None


def test_override_replaces_builtin_wholesale():
    registry = PresetRegistry.from_config({"zip": {"match": ["zip"], "span": 2}})
    preset = registry.resolve("zipCode")
    assert preset.span == 2
    assert preset.group is None
    # Position of the built-in is kept
    assert [p.key for p in registry.presets][0] == "zip"


def test_new_override_is_appended():
    registry = PresetRegistry.from_config({"vat": {"span": 1, "group": "billing"}})
    assert registry.presets[-1].key == "vat"
    # No match list: matches on its own key
    assert registry.resolve("vatNumber").key == "vat"


def test_failing_predicate_is_skipped():
    def explode(name, descriptor):
        raise ValueError("bad predicate")

    registry = PresetRegistry([
        Preset("broken", (predicate(explode),)),
        Preset("fallback", (literal("field"),)),
    ])
    assert registry.resolve("field").key == "fallback"


def test_invalid_patterns_are_dropped_not_fatal():
    registry = PresetRegistry.from_config({"odd": {"match": [42, "odd"], "span": 1}}, defaults={})
    assert len(registry) == 1
    assert registry.resolve("oddity").key == "odd"


def test_non_mapping_override_is_ignored():
    registry = PresetRegistry.from_config({"broken": "not a preset"}, defaults={})
    assert len(registry) == 0


def test_resolve_is_pure():
    registry = PresetRegistry.from_config({"custom": {"match": [re.compile("^cu")]}})
    first = registry.resolve("customer", None)
    for _ in range(3):
        assert registry.resolve("customer", None) is first
