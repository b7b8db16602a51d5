"""Main poker hand evaluation interface."""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from poker_hands.core.card import Card, Rank, Suit
from poker_hands.core.hand import Hand
from poker_hands.evaluation.constants import SHORT_POOL_REJECT, STRAIGHT_LENGTH
from poker_hands.evaluation.evaluation_config import EvaluationConfig, get_evaluation_config
from poker_hands.evaluation.scoring import score_hand
from poker_hands.evaluation.types import HandCategory, HandResult

logger = logging.getLogger(__name__)


@dataclass
class PoolAnalysis:
    """
    Groupings of a sorted pool, collected in a single scan.

    All mappings keep first-seen order from the sorted pool, so every
    tie-break below is deterministic.

    Attributes:
        sorted_hand: The pool sorted by rank, lowest first
        count_by_rank: Number of cards of each rank
        cards_by_rank: Cards of each rank, in sorted order
        count_by_suit: Number of cards of each suit
        cards_by_suit: Cards of each suit, in sorted order
        sorted_ranks: Distinct ranks, lowest first
        favoured_suit: Most common suit; on a tie, the one that reached the
                       top count last
    """
    sorted_hand: Hand
    count_by_rank: Dict[Rank, int] = field(default_factory=dict)
    cards_by_rank: Dict[Rank, List[Card]] = field(default_factory=dict)
    count_by_suit: Dict[Suit, int] = field(default_factory=dict)
    cards_by_suit: Dict[Suit, List[Card]] = field(default_factory=dict)
    sorted_ranks: List[Rank] = field(default_factory=list)
    favoured_suit: Optional[Suit] = None

    @classmethod
    def from_pool(cls, pool: Hand) -> 'PoolAnalysis':
        """Sort the pool, then group and count its cards by rank and suit."""
        analysis = cls(sorted_hand=pool.sort())
        top_suit_count = 0

        for card in analysis.sorted_hand:
            rank_count = analysis.count_by_rank.get(card.rank, 0) + 1
            analysis.count_by_rank[card.rank] = rank_count
            if rank_count == 1:
                analysis.sorted_ranks.append(card.rank)
            analysis.cards_by_rank.setdefault(card.rank, []).append(card)

            suit_count = analysis.count_by_suit.get(card.suit, 0) + 1
            analysis.count_by_suit[card.suit] = suit_count
            analysis.cards_by_suit.setdefault(card.suit, []).append(card)

            # A tie goes to the suit seen last. Ties never matter: with at
            # most 7 cards, two suits on equal counts cannot make a flush.
            if suit_count >= top_suit_count:
                top_suit_count = suit_count
                analysis.favoured_suit = card.suit

        return analysis

    def ranks_with_count(self, count: int) -> List[Rank]:
        """Ranks held exactly ``count`` times, highest first."""
        return [rank for rank in reversed(self.sorted_ranks) if self.count_by_rank[rank] == count]

    def take_favouring_suit(self, rank: Rank) -> Card:
        """First card of the rank in the favoured suit, else the first card of the rank."""
        cards = self.cards_by_rank[rank]
        for card in cards:
            if card.suit == self.favoured_suit:
                return card
        return cards[0]


class HandEvaluator:
    """
    Finds, classifies and scores the best poker hand in a pool of cards.

    Evaluation is a pure function of the pool; the evaluator only holds
    its configuration and may be shared freely between threads.
    """

    def __init__(self, config: Optional[EvaluationConfig] = None):
        """
        Initialize evaluator.

        Args:
            config: Pool policies to apply. Defaults to the shipped 'high'
                    configuration.
        """
        self.config = config if config is not None else get_evaluation_config()

    def evaluate(
            self,
            cards: Iterable[Card],
            board: Iterable[Card] = ()
        ) -> Tuple[HandCategory, Hand]:
            """
            Find the best hand that can be built from the pool.

            The work happens in two phases: analysis collects groupings of
            the pool, then hand selection walks the categories from best to
            worst and returns the first one present.

            Args:
                cards: The player's cards, or the whole pool
                board: Community cards, placed ahead of the player's cards

            Returns:
                (category, hand). The hand holds five cards, most significant
                first, or every card in the pool when the pool is smaller
                and the configuration allows it.

            Raises:
                ValueError: If the pool breaks the configured size or
                            duplicate rules
            """
            board_hand = Hand(board)
            players = Hand(cards)
            pool = board_hand.append(players, len(players))
            self._validate_pool(pool)

            # ## Analysis

            analysis = PoolAnalysis.from_pool(pool)
            quadruples = analysis.ranks_with_count(4)
            trebles = analysis.ranks_with_count(3)
            pairs = analysis.ranks_with_count(2)
            run = self._find_run(analysis)
            straight = run[-STRAIGHT_LENGTH:] if len(run) >= STRAIGHT_LENGTH else Hand()
            straight_flush = self._find_straight_flush(run)

            # Highest cards first, for padding with kickers.
            kickers = analysis.sorted_hand.reverse()

            # ## Hand selection

            category, hand = self._select_hand(
                analysis, quadruples, trebles, pairs, straight, straight_flush, kickers
            )
            logger.debug(f"Best hand from {pool}: {category.display_name} {hand}")
            return category, hand

    def _select_hand(
        self,
        analysis: PoolAnalysis,
        quadruples: List[Rank],
        trebles: List[Rank],
        pairs: List[Rank],
        straight: Hand,
        straight_flush: Hand,
        kickers: Hand
    ) -> Tuple[HandCategory, Hand]:
        """Pick the best category present, in strict precedence order."""
        cards_by_rank = analysis.cards_by_rank

        if straight_flush and straight_flush[-1].rank == Rank.ACE:
            return HandCategory.ROYAL_FLUSH, straight_flush

        if straight_flush:
            return HandCategory.STRAIGHT_FLUSH, straight_flush

        if quadruples:
            return HandCategory.FOUR_OF_A_KIND, self._add_kickers(Hand(cards_by_rank[quadruples[0]]), kickers)

        # A second treble can fill the house when it beats the best pair.
        fillers = pairs[:1] + trebles[1:2]
        if trebles and fillers:
            filler = max(fillers, key=lambda rank: rank.high_value)
            treble = Hand(cards_by_rank[trebles[0]])
            return HandCategory.FULL_HOUSE, treble.append(cards_by_rank[filler], 2)

        if analysis.favoured_suit is not None and analysis.count_by_suit[analysis.favoured_suit] >= self.config.hand_size:
            suited = Hand(analysis.cards_by_suit[analysis.favoured_suit])
            return HandCategory.FLUSH, suited.reverse().take(self.config.hand_size)

        if straight:
            return HandCategory.STRAIGHT, straight

        if trebles:
            return HandCategory.THREE_OF_A_KIND, self._add_kickers(Hand(cards_by_rank[trebles[0]]), kickers)

        if len(pairs) >= 2:
            two_pairs = Hand(cards_by_rank[pairs[0]]).append(cards_by_rank[pairs[1]], 2)
            return HandCategory.TWO_PAIRS, self._add_kickers(two_pairs, kickers)

        if pairs:
            return HandCategory.PAIR, self._add_kickers(Hand(cards_by_rank[pairs[0]]), kickers)

        return HandCategory.HIGH_CARD, kickers.take(self.config.hand_size)

    def _find_run(self, analysis: PoolAnalysis) -> Hand:
        """
        Find the highest run of consecutive ranks, one card per rank.

        Aces are high and low: an Ace in the pool is also scanned ahead of
        Two. Each position prefers the favoured suit so that straight
        flushes are found.
        """
        ranks = list(analysis.sorted_ranks)
        if ranks and ranks[-1] == Rank.ACE:
            ranks.insert(0, Rank.ACE)

        run: List[Card] = []
        best_run: List[Card] = []
        last_rank: Optional[Rank] = None
        for i, rank in enumerate(ranks):
            card = analysis.take_favouring_suit(rank)

            if last_rank is None or _follows(last_rank, rank):
                run.append(card)
                last_rank = rank
                continue

            # No better straight, or indeed any straight, can follow.
            if len(ranks) - i < STRAIGHT_LENGTH:
                break

            if len(run) >= STRAIGHT_LENGTH:
                best_run = run
            run = [card]
            last_rank = rank

        if len(run) < STRAIGHT_LENGTH:
            run = best_run
        return Hand(run)

    @staticmethod
    def _find_straight_flush(run: Hand) -> Hand:
        """Highest five-card window of the run that shares one suit."""
        for start in range(len(run) - STRAIGHT_LENGTH, -1, -1):
            window = run[start:start + STRAIGHT_LENGTH]
            if len({card.suit for card in window}) == 1:
                return window
        return Hand()

    def _add_kickers(self, hand: Hand, kickers: Hand) -> Hand:
        """Pad the hand with the highest cards not already in it."""
        required = self.config.hand_size - len(hand)
        return hand.append_when(kickers, required, lambda card: card not in hand)

    def _validate_pool(self, pool: Hand) -> None:
        """Apply the configured size and duplicate rules to the pool."""
        config = self.config
        if len(pool) < config.hand_size and config.short_pool == SHORT_POOL_REJECT:
            raise ValueError(
                f"{config.id} evaluation requires at least {config.hand_size} cards, got {len(pool)}"
            )

        if config.max_pool_size is not None and len(pool) > config.max_pool_size:
            raise ValueError(
                f"{config.id} evaluation accepts at most {config.max_pool_size} cards, got {len(pool)}"
            )

        if config.check_duplicates:
            seen = set()
            for card in pool:
                if card in seen:
                    raise ValueError(f"Duplicate card in pool: {card}")
                seen.add(card)

    def score(self, category: HandCategory, hand: Iterable[Card]) -> int:
        """Score an evaluated hand. See ``score_hand``."""
        return score_hand(category, hand)

    def best_hand(self, cards: Iterable[Card], board: Iterable[Card] = ()) -> HandResult:
        """
        Evaluate and score the best hand in the pool.

        Raises:
            HandSizeError: If the pool yields fewer than five cards
        """
        category, hand = self.evaluate(cards, board)
        return HandResult(category=category, hand=hand, score=self.score(category, hand))

    def compare_hands(self, result1: HandResult, result2: HandResult) -> int:
        """
        Compare two evaluated hands.

        Returns:
            1 if result1 wins, -1 if result2 wins, 0 if tie
        """
        if result1.score > result2.score:
            return 1
        if result1.score < result2.score:
            return -1
        return 0


def _follows(previous: Rank, rank: Rank) -> bool:
    """True when rank is one above previous. King is followed by Ace."""
    return rank.ordinal == previous.ordinal + 1 or (previous == Rank.KING and rank == Rank.ACE)


# Global evaluator instance
evaluator = HandEvaluator()


def evaluate(cards: Iterable[Card], board: Iterable[Card] = ()) -> Tuple[HandCategory, Hand]:
    """Convenience function to find the best hand with the default evaluator."""
    return evaluator.evaluate(cards, board)


def score(category: HandCategory, hand: Iterable[Card]) -> int:
    """Convenience function to score a hand."""
    return evaluator.score(category, hand)


def best_hand(cards: Iterable[Card], board: Iterable[Card] = ()) -> HandResult:
    """Convenience function to evaluate and score with the default evaluator."""
    return evaluator.best_hand(cards, board)


def compare_hands(result1: HandResult, result2: HandResult) -> int:
    """Convenience function to compare two evaluated hands."""
    return evaluator.compare_hands(result1, result2)
