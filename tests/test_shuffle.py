# Area: Deck Tests
"""Tests for template expansion and the hybrid shuffle."""

import random
from collections import Counter

import pytest
from flip6._deck.catalog import CARD_CATALOG, default_counts, is_number
from flip6._deck.shuffle import (
    build_template,
    force_streak,
    hybrid_shuffle,
    insert_clustered,
    longest_run,
)


def number_counts():
    return {value: count for value, _, count in CARD_CATALOG if is_number(value)}


class TestBuildTemplate:
    """Tests for build_template."""

    def test_expands_counts(self):
        """Test each value is repeated count times."""
        cards = build_template({"5": 2, "Freeze": 1, "0": 0})
        assert Counter(cards) == Counter({"5": 2, "Freeze": 1})

    def test_full_catalog(self):
        """Test the standard template has 93 cards."""
        assert len(build_template(default_counts())) == 93

    def test_negative_count_raises(self):
        """Test that negative counts are rejected."""
        with pytest.raises(ValueError):
            build_template({"5": -1})


class TestHybridShuffle:
    """Tests for hybrid_shuffle."""

    def test_preserves_multiset(self):
        """Test the shuffled deck is a permutation of the template."""
        template = build_template(default_counts())
        for seed in range(25):
            deck = hybrid_shuffle(template, rng=random.Random(seed))
            assert Counter(deck) == Counter(template)

    def test_same_seed_same_order(self):
        """Test shuffles are reproducible from a seed."""
        template = build_template(default_counts())
        first = hybrid_shuffle(template, rng=random.Random(42))
        second = hybrid_shuffle(template, rng=random.Random(42))
        assert first == second

    def test_does_not_mutate_input(self):
        """Test the input list is left untouched."""
        template = build_template(default_counts())
        original = list(template)
        hybrid_shuffle(template, rng=random.Random(1))
        assert template == original

    def test_forced_streak_across_seeds(self):
        """Test a run of three equal numbers appears for every seed."""
        template = build_template(number_counts())
        for seed in range(200):
            deck = hybrid_shuffle(template, rng=random.Random(seed))
            assert longest_run(deck) >= 3

    def test_actions_stay_out_of_first_zone(self):
        """Test no non-number card is placed in the first 10% of the backbone."""
        counts = {str(n): 10 for n in range(10)}
        counts.update({"Freeze": 2, "Swap": 2})
        template = build_template(counts)
        for seed in range(50):
            deck = hybrid_shuffle(template, rng=random.Random(seed))
            assert all(is_number(card) for card in deck[:10])

    def test_surplus_goes_to_bottom(self):
        """Test cards over the action cap end up at the bottom of the pile."""
        counts = {str(n): 5 for n in range(10)}
        counts["Take3"] = 20
        deck = hybrid_shuffle(build_template(counts), rng=random.Random(3), action_cap=14)
        assert deck[-6:] == ["Take3"] * 6
        assert Counter(deck)["Take3"] == 20

    def test_empty_input(self):
        """Test shuffling nothing returns nothing."""
        assert hybrid_shuffle([], rng=random.Random(0)) == []


class TestForceStreak:
    """Tests for force_streak."""

    def test_forces_run_from_later_copies(self):
        """Test later copies are swapped into the first fillable window."""
        sequence = ["1", "2", "1", "3", "1"]
        assert force_streak(sequence, 3) is True
        assert sequence[:3] == ["1", "1", "1"]
        assert Counter(sequence) == Counter(["1", "2", "1", "3", "1"])

    def test_no_possible_run(self):
        """Test distinct values cannot be forced."""
        sequence = ["1", "2", "3"]
        assert force_streak(sequence, 2) is False
        assert sequence == ["1", "2", "3"]

    def test_short_sequence(self):
        """Test sequences shorter than the run are left alone."""
        assert force_streak(["4"], 2) is False

    def test_longest_run(self):
        """Test run length measurement."""
        assert longest_run([]) == 0
        assert longest_run(["1", "2", "2", "2", "3"]) == 3


class TestInsertClustered:
    """Tests for insert_clustered."""

    def test_all_inserts_placed(self):
        """Test every insert lands in the deck, backbone order kept."""
        backbone = [str(n % 10) for n in range(40)]
        inserts = ["Freeze", "Swap", "Take3", "+4", "-6", "2x", "+5"]
        deck = insert_clustered(backbone, inserts, random.Random(5))
        assert len(deck) == 47
        assert [c for c in deck if is_number(c)] == backbone
        assert Counter(c for c in deck if not is_number(c)) == Counter(inserts)

    def test_empty_backbone(self):
        """Test inserts are returned as-is without a backbone."""
        assert insert_clustered([], ["Freeze"], random.Random(0)) == ["Freeze"]
