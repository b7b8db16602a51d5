"""Tests for best-hand evaluation."""
import itertools
import logging
import random
import sys

import pytest

from poker_hands.core.card import Card, Rank, Suit
from poker_hands.core.deck import Deck
from poker_hands.core.hand import Hand
from poker_hands.evaluation.evaluation_config import EvaluationConfig
from poker_hands.evaluation.evaluator import (
    HandEvaluator,
    PoolAnalysis,
    best_hand,
    compare_hands,
    evaluate,
)
from poker_hands.evaluation.scoring import HandSizeError
from poker_hands.evaluation.types import HandCategory, HandResult

logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def setup_logging():
    """Set up logging for all tests."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True
    )


@pytest.fixture
def evaluator():
    """Create a hand evaluator instance."""
    return HandEvaluator()


@pytest.mark.parametrize("pool,expected_category,expected_hand", [
    # Five card pools
    ("3s 5d 7c 9s Th", HandCategory.HIGH_CARD, "Th 9s 7c 5d 3s"),
    ("3h 3s 7d qc kc", HandCategory.PAIR, "3h 3s Kc Qc 7d"),
    ("2h 2d 7c 3c 3s", HandCategory.TWO_PAIRS, "3c 3s 2h 2d 7c"),
    ("2d 2h 2s qs 9c", HandCategory.THREE_OF_A_KIND, "2d 2h 2s Qs 9c"),
    ("6h 7s 8h 9c tc", HandCategory.STRAIGHT, "6h 7s 8h 9c Tc"),
    ("5s 4h 2h 3h Ad", HandCategory.STRAIGHT, "Ad 2h 3h 4h 5s"),
    ("Ac Tc Qs Jc Kd", HandCategory.STRAIGHT, "Tc Jc Qs Kd Ac"),
    ("3c 7c 9c tc kc", HandCategory.FLUSH, "Kc Tc 9c 7c 3c"),
    ("ad ah as Ts Td", HandCategory.FULL_HOUSE, "Ad Ah As Ts Td"),
    ("4c 4d 4s 4h 5c", HandCategory.FOUR_OF_A_KIND, "4c 4d 4s 4h 5c"),
    ("6s 7s 8s 9s Ts", HandCategory.STRAIGHT_FLUSH, "6s 7s 8s 9s Ts"),
    ("Th jh qh kh ah", HandCategory.ROYAL_FLUSH, "Th Jh Qh Kh Ah"),
    # Seven card pools
    ("5h 3h 2s Ac 4s 8c 9d", HandCategory.STRAIGHT, "Ac 2s 3h 4s 5h"),
    ("2h 5h 9h Jh Kh Ah 3c", HandCategory.FLUSH, "Ah Kh Jh 9h 5h"),
    ("4d 6d 7s 8d 9d Td 5c", HandCategory.FLUSH, "Td 9d 8d 6d 4d"),
    ("Kd Ks 7h 7c 4s 4d Qc", HandCategory.TWO_PAIRS, "Kd Ks 7h 7c Qc"),
    ("Kd Ks 7h 7c 4s 4d 2c", HandCategory.TWO_PAIRS, "Kd Ks 7h 7c 4d"),
    ("9s 9h 9d 5c 5d 5h Ac", HandCategory.FULL_HOUSE, "9s 9h 9d 5c 5d"),
    ("Jc Jd Js 4h 4d Qs Qh", HandCategory.FULL_HOUSE, "Jc Jd Js Qs Qh"),
    ("8c 8d 8h 8s Kc Kd Ks", HandCategory.FOUR_OF_A_KIND, "8c 8d 8h 8s Ks"),
    ("5h 6h 7h 8h 9h Tc 2d", HandCategory.STRAIGHT_FLUSH, "5h 6h 7h 8h 9h"),
    ("Ah 2h 3h 4h 5h Kc Qd", HandCategory.STRAIGHT_FLUSH, "Ah 2h 3h 4h 5h"),
    ("Qs 9d Qd 2c 9s Qc 7h", HandCategory.FULL_HOUSE, "Qs Qd Qc 9d 9s"),
    ("As 8d 8s Jh 3c 6d Kc", HandCategory.PAIR, "8d 8s As Kc Jh"),
    ("Ks 2d 9c Qh 7s 4c Jd", HandCategory.HIGH_CARD, "Ks Qh Jd 9c 7s"),
    # Eight card pool: the highest run wins, not the lowest
    ("2s 3s 4d 5c 6s 7d 8d 9h", HandCategory.STRAIGHT, "5c 6s 7d 8d 9h"),
])
def test_evaluate(evaluator, pool, expected_category, expected_hand):
    """Test that the best hand is found and ordered most significant first."""
    category, hand = evaluator.evaluate(Hand.from_string(pool))
    assert category == expected_category
    assert hand == Hand.from_string(expected_hand)


def test_evaluate_board_and_players(evaluator):
    """Board and player cards are combined into one pool."""
    players = Hand.from_string("Ah Kh")
    board = Hand.from_string("Qh Jh Th 2c 3d")
    category, hand = evaluator.evaluate(players, board=board)
    assert category == HandCategory.ROYAL_FLUSH
    assert hand == Hand.from_string("Th Jh Qh Kh Ah")


def test_evaluate_accepts_card_lists(evaluator):
    cards = [Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.HEARTS),
             Card(Rank.TWO, Suit.CLUBS), Card(Rank.NINE, Suit.DIAMONDS),
             Card(Rank.FIVE, Suit.CLUBS)]
    category, hand = evaluator.evaluate(cards)
    assert category == HandCategory.PAIR
    assert hand == Hand.from_string("As Ah 9d 5c 2c")


def test_evaluate_does_not_mutate_pool(evaluator):
    pool = Hand.from_string("Kd Ks 7h 7c 4s 4d Qc")
    evaluator.evaluate(pool)
    assert pool == Hand.from_string("Kd Ks 7h 7c 4s 4d Qc")


def test_favoured_suit():
    """The most common suit is favoured; on a tie, the suit to reach the top count last wins."""
    analysis = PoolAnalysis.from_pool(Hand.from_string("2h 3s 4h 5s 6h"))
    assert analysis.favoured_suit == Suit.HEARTS

    analysis = PoolAnalysis.from_pool(Hand.from_string("2s 3s 4d 5c 6s 7d 8d 9h"))
    assert analysis.favoured_suit == Suit.DIAMONDS


def test_rank_groupings():
    analysis = PoolAnalysis.from_pool(Hand.from_string("Kd Ks 7h 7c 4s 4d 4c"))
    assert analysis.ranks_with_count(3) == [Rank.FOUR]
    assert analysis.ranks_with_count(2) == [Rank.KING, Rank.SEVEN]
    assert analysis.ranks_with_count(4) == []
    assert analysis.sorted_ranks == [Rank.FOUR, Rank.SEVEN, Rank.KING]


@pytest.mark.parametrize("pool,expected_category,expected_hand", [
    ("", HandCategory.HIGH_CARD, ""),
    ("As Kd", HandCategory.HIGH_CARD, "As Kd"),
    ("7s 7d 2c", HandCategory.PAIR, "7s 7d 2c"),
    ("9c 9d 9h 9s", HandCategory.FOUR_OF_A_KIND, "9c 9d 9h 9s"),
])
def test_short_pool_degrades(evaluator, pool, expected_category, expected_hand):
    """Pools under five cards give the best category from what exists."""
    category, hand = evaluator.evaluate(Hand.from_string(pool))
    assert category == expected_category
    assert hand == Hand.from_string(expected_hand)


def test_short_pool_cannot_be_scored(evaluator):
    with pytest.raises(HandSizeError):
        evaluator.best_hand(Hand.from_string("As Kd 7c"))


def test_short_pool_rejected_by_config():
    strict = HandEvaluator(EvaluationConfig(id="strict", name="Strict", short_pool="reject"))
    with pytest.raises(ValueError, match="at least 5 cards"):
        strict.evaluate(Hand.from_string("As Kd 7c 2h"))


def test_max_pool_size():
    holdem = HandEvaluator(EvaluationConfig(id="holdem", name="Hold'em", max_pool_size=7))
    with pytest.raises(ValueError, match="at most 7 cards"):
        holdem.evaluate(Hand.from_string("2s 3s 4d 5c 6s 7d 8d 9h"))


def test_duplicate_cards_rejected(evaluator):
    with pytest.raises(ValueError, match="Duplicate card in pool: As"):
        evaluator.evaluate(Hand.from_string("As Kd As Qc Jh"))


def test_duplicate_check_can_be_disabled():
    lenient = HandEvaluator(EvaluationConfig(id="lenient", name="Lenient", check_duplicates=False))
    category, hand = lenient.evaluate(Hand.from_string("As Kd As Qc Jh"))
    assert category == HandCategory.PAIR
    assert hand == Hand.from_string("As As Kd Qc Jh")


def test_best_hand(evaluator):
    result = evaluator.best_hand(Hand.from_string("3s 5d 7c 9s Th"))
    assert isinstance(result, HandResult)
    assert result.category == HandCategory.HIGH_CARD
    assert result.hand == Hand.from_string("Th 9s 7c 5d 3s")
    assert result.score == 1009070503
    assert result.description == "High Card: Th 9s 7c 5d 3s"


def test_module_level_functions():
    """The convenience functions use the shared default evaluator."""
    category, hand = evaluate(Hand.from_string("Th Jh Qh Kh Ah"))
    assert category == HandCategory.ROYAL_FLUSH

    royal = best_hand(Hand.from_string("Th Jh Qh Kh Ah"))
    trips = best_hand(Hand.from_string("Qc Qs Qh Th 9h"))
    assert compare_hands(royal, trips) == 1
    assert compare_hands(trips, royal) == -1
    assert compare_hands(trips, trips) == 0


def test_equal_hands_tie(evaluator):
    """Hands that differ only by suit score the same."""
    first = evaluator.best_hand(Hand.from_string("Ah Kd 9c 7c 2s 3h 4c"))
    second = evaluator.best_hand(Hand.from_string("As Kc 9h 7d 2c 3s 4h"))
    assert first.score == second.score
    assert evaluator.compare_hands(first, second) == 0


def test_kickers_decide_between_pairs(evaluator):
    better = evaluator.best_hand(Hand.from_string("8s 8d Ac Jh 5c 3d 2s"))
    worse = evaluator.best_hand(Hand.from_string("8c 8h Kc Jd 5s 3s 2d"))
    assert evaluator.compare_hands(better, worse) == 1


def _deal_pools(count, size, seed):
    deck = Deck(rng=random.Random(seed))
    for _ in range(count):
        deck.shuffle()
        yield deck.take(size)


@pytest.mark.parametrize("size", [5, 6, 7])
def test_best_hand_is_five_cards_from_pool(evaluator, size):
    """Every evaluated hand holds five distinct cards taken from the pool."""
    for pool in _deal_pools(200, size, seed=size):
        category, hand = evaluator.evaluate(pool)
        assert len(hand) == 5, f"{pool} gave {category} {hand}"
        assert len(set(hand)) == 5
        assert all(card in pool for card in hand)


def test_evaluation_ignores_pool_order(evaluator):
    """Reordering the pool never changes the category or score."""
    rng = random.Random(11)
    for pool in _deal_pools(100, 7, seed=3):
        expected = evaluator.best_hand(pool)
        cards = pool.get_cards()
        rng.shuffle(cards)
        actual = evaluator.best_hand(cards)
        assert actual.category == expected.category
        assert actual.score == expected.score


def test_category_dominance_on_random_pools(evaluator):
    """A better category always outscores a worse one."""
    results = [evaluator.best_hand(pool) for pool in _deal_pools(300, 7, seed=99)]
    for first, second in itertools.combinations(results, 2):
        if first.category > second.category:
            assert first.score > second.score
        elif first.category < second.category:
            assert first.score < second.score


def test_flush_found_in_every_five_suited_cards(evaluator):
    """Any five cards of one suit are at least a flush."""
    spades = [Card(rank, Suit.SPADES) for rank in Rank]
    for combo in itertools.islice(itertools.combinations(spades, 5), 0, None, 37):
        category, _ = evaluator.evaluate(combo)
        assert category >= HandCategory.FLUSH
