"""Unit tests for locale-aware name collation."""

from __future__ import annotations

from transforms.collation import collation_key, sort_by_name


def test_sort_by_name_ignores_case_at_primary_level() -> None:
    """Names should interleave regardless of capitalization."""
    names = ["banana", "Apple", "cherry", "Banana2"]

    ordered = sort_by_name(names, lambda name: name)

    assert ordered == ["Apple", "banana", "Banana2", "cherry"]


def test_sort_by_name_places_lowercase_before_uppercase_on_tie() -> None:
    """Case should only break ties, lowercase first."""
    ordered = sort_by_name(["Django", "django"], lambda name: name)

    assert ordered == ["django", "Django"]


def test_collation_key_groups_accented_letters_with_base_letter() -> None:
    """Accents should only matter when base letters are equal."""
    ordered = sorted(["Elixir", "Ember", "Électron"], key=collation_key)

    assert ordered == ["Électron", "Elixir", "Ember"]


def test_collation_key_orders_unaccented_before_accented() -> None:
    """Equal base letters should put the unaccented name first."""
    ordered = sorted(["Électron", "Electron"], key=collation_key)

    assert ordered == ["Electron", "Électron"]


def test_sort_by_name_is_stable_for_identical_names() -> None:
    """Identical names should keep their input order."""
    items = [("first", "Same"), ("second", "Same")]

    ordered = sort_by_name(items, lambda item: item[1])

    assert [item[0] for item in ordered] == ["first", "second"]


def test_sort_by_name_orders_punctuation_before_digits() -> None:
    """Punctuation should sort ahead of digits, which sort ahead of letters."""
    ordered = sort_by_name(["ab", "a1", "a_b"], lambda name: name)

    assert ordered == ["a_b", "a1", "ab"]


def test_sort_by_name_uses_root_punctuation_order() -> None:
    """Punctuation marks should follow root collation ranks, not code points."""
    ordered = sort_by_name(["a(b", "a-b", "a.b", "a b"], lambda name: name)

    assert ordered == ["a b", "a-b", "a.b", "a(b"]


def test_sort_by_name_orders_symbols_after_punctuation() -> None:
    """Symbols should follow punctuation, with currency signs before digits."""
    ordered = sort_by_name(["a9", "a$", "a+", "a!"], lambda name: name)

    assert ordered == ["a!", "a+", "a$", "a9"]
