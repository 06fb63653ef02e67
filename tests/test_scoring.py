# Area: Engine Tests
"""Tests for round scoring."""

from flip6._engine.scoring import ScoringRules, compute_hand_score, score_player
from flip6._engine.state import Player


class TestComputeHandScore:
    """Tests for compute_hand_score."""

    def test_times_two(self):
        """Test [3, 4, 2x] scores (3 + 4) * 2."""
        assert compute_hand_score(["3", "4", "2x"]) == 14

    def test_completion_bonus(self):
        """Test six distinct numbers earn the bonus: 21 + 15."""
        assert compute_hand_score(["1", "2", "3", "4", "5", "6"]) == 36

    def test_bonus_disabled(self):
        """Test a zero bonus leaves the plain sum."""
        rules = ScoringRules(completion_bonus=0)
        assert compute_hand_score(["1", "2", "3", "4", "5", "6"], rules) == 21

    def test_bonus_counts_every_card(self):
        """Test modifier cards count toward the completion threshold."""
        hand = ["1", "2", "3", "4", "5", "+4"]
        assert compute_hand_score(hand) == 15 + 4 + 15

    def test_multiply_before_add(self):
        """Test 2x applies to numbers only, before +4."""
        assert compute_hand_score(["3", "2x", "+4"]) == 10

    def test_modifiers_apply_once(self):
        """Test a repeated modifier is only counted once."""
        assert compute_hand_score(["5", "+4", "+4"]) == 9
        assert compute_hand_score(["5", "+5", "-6"]) == 4

    def test_minus_six_clamps_at_zero(self):
        """Test the default floor at zero."""
        assert compute_hand_score(["1", "-6"]) == 0

    def test_minus_six_without_clamp(self):
        """Test negative scores when clamping is off."""
        rules = ScoringRules(clamp_at_zero=False)
        assert compute_hand_score(["1", "-6"], rules) == -5

    def test_action_cards_score_nothing(self):
        """Test held Second Chance cards add no points."""
        assert compute_hand_score(["7", "SecondChance"]) == 7

    def test_empty_hand(self):
        """Test an empty hand scores zero."""
        assert compute_hand_score([]) == 0


class TestScorePlayer:
    """Tests for score_player."""

    def test_busted_player_scores_zero(self):
        """Test bust forces a zero score whatever the hand."""
        player = Player(player_id=1, name="A", seat=0, busted=True, stayed=True,
                        hand=["12", "11", "12"])
        assert score_player(player) == 0

    def test_stayed_player_scores_hand(self):
        """Test a stayed player scores their hand."""
        player = Player(player_id=1, name="A", seat=0, stayed=True, hand=["12", "+5"])
        assert score_player(player) == 17
