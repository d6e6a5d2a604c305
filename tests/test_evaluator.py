"""Tests for hand evaluation."""

import itertools
import random

import pytest
from treys import Evaluator as TreysEvaluator

from holdem_equity.game.cards import FULL_DECK, parse_cards
from holdem_equity.game.evaluator import (
    Category, HandRank, Outcome, compare, describe, evaluate,
)


def rank_of(text: str) -> HandRank:
    return evaluate(parse_cards(text))


# Best-to-worst ladder of 7-card hands; equal neighbours share a rank
LADDER = [
    ("AcKcQcJcTc8h5h", Category.STRAIGHT_FLUSH),
    ("KcQcJcTc9c8h5h", Category.STRAIGHT_FLUSH),
    ("AcTcTsThTd8h5h", Category.FOUR_OF_A_KIND),
    ("KcKh9c8c8s8h5h", Category.FULL_HOUSE),
    ("AcKcQcJc9c8c5c", Category.FLUSH),
    ("KcQcJc9c8c8d5c", Category.FLUSH),
    ("AcKcQcJcTh8h5h", Category.STRAIGHT),
    ("AcKh9c8c8s8h5h", Category.THREE_OF_A_KIND),
    ("AdKcKdTd9c6c6h", Category.TWO_PAIR),
    ("KcKdQdTd9c6c6h", Category.TWO_PAIR),
    ("AcAdKcTd9c8c6h", Category.PAIR),
    ("AcAdQdTd9c8c6h", Category.PAIR),
    ("AcQcQdTd9c8c6h", Category.PAIR),
    ("AcKcQdTd9c8c6h", Category.HIGH_CARD),
    ("AcKcQdTd9c8c5h", Category.HIGH_CARD),
    ("KcQdTd9c8c6h4c", Category.HIGH_CARD),
]


def random_hands(count: int, size: int = 7, seed: int = 7):
    rng = random.Random(seed)
    deck = list(FULL_DECK)
    return [rng.sample(deck, size) for _ in range(count)]


TREYS = TreysEvaluator()


def treys_score(cards) -> int:
    """treys rank (lower is better) for a 5-7 card hand."""
    encoded = [c.to_treys() for c in cards]
    return TREYS.evaluate(encoded[:2], encoded[2:])


class TestEvaluateKnownHands:
    @pytest.mark.parametrize("text,category", LADDER)
    def test_ladder_categories(self, text, category):
        assert rank_of(text).category == category

    def test_ladder_is_ordered(self):
        ranks = [rank_of(text) for text, _ in LADDER]
        for i, (better, worse) in enumerate(zip(ranks, ranks[1:])):
            if LADDER[i][0] == "AcKcQdTd9c8c6h":
                assert better == worse
            else:
                assert better > worse, LADDER[i][0]

    def test_ace_high_equal_after_top_five(self):
        # Sixth and seventh cards never play
        assert rank_of("AcKcQdTd9c8c6h") == rank_of("AcKcQdTd9c8c5h")

    def test_kicker_breaks_pair_tie(self):
        assert rank_of("AcAdKcTd9c8c6h") > rank_of("AhAsQdTd9c8c6h")

    def test_two_trips_make_full_house(self):
        assert rank_of("9c9d9hKcKdKs2c") == rank_of("KhKcKd9s9h")

    def test_three_pairs_use_best_kicker(self):
        # Third pair rank can be the kicker
        assert rank_of("AcAdKcKdQcQd2h") == rank_of("AhAsKhKsQh")

    def test_quads_kicker_from_paired_board(self):
        assert rank_of("7c7d7h7sKcKd2h") == rank_of("7c7d7h7sKh")

    def test_flush_beats_straight_in_same_hand(self):
        assert rank_of("9h8h7h6d5h2h3c").category == Category.FLUSH

    def test_six_card_flush_keeps_top_five(self):
        assert rank_of("AhJh9h7h5h3h2c") == rank_of("AsJs9s7s5s")

    def test_steel_wheel(self):
        steel_wheel = rank_of("Ah2h3h4h5hKcQd")
        assert steel_wheel.category == Category.STRAIGHT_FLUSH
        assert steel_wheel < rank_of("2c3c4c5c6c")

    def test_five_and_six_cards(self):
        assert rank_of("AsKsQsJsTs").category == Category.STRAIGHT_FLUSH
        assert rank_of("2c2d5h9sJcJd") == rank_of("JhJs2h2s9c")

    def test_wrong_card_count(self):
        with pytest.raises(ValueError):
            rank_of("AsKsQsJs")
        with pytest.raises(ValueError):
            rank_of("AsKsQsJsTs9s8s7s")

    def test_rank_is_category_and_tiebreak(self):
        rank = rank_of("AcAdKcTd9c8c6h")
        category, tiebreak = rank
        assert category is rank.category
        assert isinstance(tiebreak, tuple)


class TestWheel:
    def test_wheel_is_lowest_straight(self):
        wheel = rank_of("As2d3c4h5s")
        six_high = rank_of("2c3d4h5s6c")
        assert wheel.category == Category.STRAIGHT
        assert wheel > rank_of("AcAdAhKsQc")
        assert wheel < six_high

    def test_wheel_beats_broken_sequence(self):
        wheel = rank_of("As2d3c4h5sKcKd")
        broken = rank_of("As2d3c4h6sKcKd")
        assert broken.category == Category.PAIR
        assert wheel > broken

    def test_wheel_among_seven_cards(self):
        assert rank_of("As2d3c4h5s9c9d") == rank_of("Ac2c3d4d5h")

    def test_higher_straight_preferred_over_wheel(self):
        assert rank_of("As2d3c4h5s6c9d") == rank_of("2d3c4h5s6c")


class TestCategoryOrdering:
    SAMPLES = {
        Category.STRAIGHT_FLUSH: ["9s8s7s6s5s", "5d4d3d2dAd"],
        Category.FOUR_OF_A_KIND: ["2c2d2h2s3c", "AcAdAhAsKc"],
        Category.FULL_HOUSE: ["2c2d2h3s3c", "AcAdAhKsKc"],
        Category.FLUSH: ["2h3h4h5h7h", "AhKhQhJh9h"],
        Category.STRAIGHT: ["As2d3c4h5s", "AsKdQcJhTs"],
        Category.THREE_OF_A_KIND: ["2c2d2h3s4c", "AcAdAhKsQc"],
        Category.TWO_PAIR: ["2c2d3h3s4c", "AcAdKhKsQc"],
        Category.PAIR: ["2c2d3h4s5c", "AcAdKhQsJc"],
        Category.HIGH_CARD: ["2c3d4h5s7c", "AcKdQhJs9c"],
    }

    def test_samples_have_their_category(self):
        for category, hands in self.SAMPLES.items():
            for text in hands:
                assert rank_of(text).category == category, text

    def test_every_higher_category_beats_every_lower(self):
        for high, low in itertools.combinations(sorted(self.SAMPLES, reverse=True), 2):
            for strong in self.SAMPLES[high]:
                for weak in self.SAMPLES[low]:
                    assert rank_of(strong) > rank_of(weak), (strong, weak)


class TestDeterminism:
    def test_input_order_does_not_matter(self):
        rng = random.Random(3)
        for hand in random_hands(50):
            expected = evaluate(hand)
            for _ in range(5):
                shuffled = hand[:]
                rng.shuffle(shuffled)
                assert evaluate(shuffled) == expected

    def test_accepts_tuples(self):
        hand = random_hands(1)[0]
        assert evaluate(tuple(hand)) == evaluate(hand)


class TestAgainstReference:
    def test_matches_best_of_21(self):
        for hand in random_hands(400, seed=11):
            best = max(evaluate(five) for five in itertools.combinations(hand, 5))
            assert evaluate(hand) == best

    def test_category_matches_treys(self):
        for hand in random_hands(400, seed=13):
            rank_class = TREYS.get_rank_class(treys_score(hand))
            # treys classes run 0/1 (royal/straight flush) to 9 (high card)
            assert evaluate(hand).category == min(8, 9 - rank_class)

    def test_ordering_matches_treys(self):
        hands = random_hands(600, seed=17)
        for a, b in zip(hands[::2], hands[1::2]):
            ours = compare(evaluate(a), evaluate(b))
            score_a, score_b = treys_score(a), treys_score(b)
            if score_a < score_b:
                assert ours is Outcome.WIN
            elif score_a > score_b:
                assert ours is Outcome.LOSS
            else:
                assert ours is Outcome.TIE


class TestCompare:
    def test_win_loss_tie(self):
        quads = rank_of("2c2d2h2s3c")
        boat = rank_of("AcAdAhKsKc")
        assert compare(quads, boat) is Outcome.WIN
        assert compare(boat, quads) is Outcome.LOSS
        assert compare(boat, rank_of("AsAhAdKcKh")) is Outcome.TIE

    def test_kicker_decides(self):
        assert compare(rank_of("AcAdKhQsJc"), rank_of("AhAsKdQhTc")) is Outcome.WIN

    def test_describe(self):
        assert describe(rank_of("KhKcKd8d8h")) == "Full House"
        assert describe(rank_of("KhKcKd8d2h")) == "Three of a Kind"
        assert describe(rank_of("2c3d4h5s7c")) == "High Card"
