"""Constants for hand evaluation and scoring."""

# Cards in a complete poker hand.
HAND_SIZE = 5

# Fewest distinct ranks that make a straight.
STRAIGHT_LENGTH = 5

# Each card occupies two decimal digits of a score.
SCORE_RADIX = 100

# Value of an Ace when it plays low in A-2-3-4-5.
LOW_ACE_VALUE = 1

# Policies for pools holding fewer than HAND_SIZE cards.
SHORT_POOL_DEGRADE = 'degrade'
SHORT_POOL_REJECT = 'reject'
SHORT_POOL_POLICIES = (SHORT_POOL_DEGRADE, SHORT_POOL_REJECT)
