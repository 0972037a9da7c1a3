import itertools
import random

SPADES = "spades"
HEARTS = "hearts"
CLUBS = "clubs"
DIAMONDS = "diamonds"

SUITS = (SPADES, HEARTS, CLUBS, DIAMONDS)
SUIT_SYMBOLS = {SPADES: "♠", HEARTS: "♥", CLUBS: "♣", DIAMONDS: "♦"}
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

ACE = 1
KING = 13
NUM_PER_SUIT = 13
DECK_SIZE = 104

# Eight single-suit sets make up every deck.
VARIANT_SUITS = {
    1: (SPADES,) * 8,
    2: (SPADES,) * 4 + (HEARTS,) * 4,
    4: (SPADES, SPADES, HEARTS, HEARTS, CLUBS, CLUBS, DIAMONDS, DIAMONDS),
}

_idCounter = itertools.count(1)


def nextCardId():
    return f"c{next(_idCounter)}"


class Card:
    """
    A playing card. suit, rank and id never change after creation, faceUp is the
    only mutable field.
    """

    __slots__ = ("_suit", "_rank", "_id", "faceUp")

    def __init__(self, suit, rank, faceUp=False, id=None):
        if suit not in SUITS:
            raise ValueError(f"unknown suit: {suit!r}")
        if not ACE <= rank <= KING:
            raise ValueError(f"rank out of range: {rank!r}")
        self._suit = suit
        self._rank = rank
        self._id = id if id is not None else nextCardId()
        self.faceUp = faceUp

    @property
    def suit(self):
        return self._suit

    @property
    def rank(self):
        return self._rank

    @property
    def id(self):
        return self._id

    def __repr__(self):
        return f"Card({self._suit!r}, {self._rank}, faceUp={self.faceUp}, id={self._id!r})"

    def label(self):
        return SUIT_SYMBOLS[self._suit] + RANKS[self._rank - 1]

    def gameStr(self):
        if not self.faceUp:
            return "---"
        return self.label()

    def color(self):
        if self._suit in (SPADES, CLUBS):
            return "black"
        return "red"

    def copy(self):
        return Card(self._suit, self._rank, self.faceUp, self._id)

    def suitableAsSequenceFor(self, upper):
        return self._suit == upper.suit and self._rank == upper.rank + 1


def extendStack(stack, suit, faceUp=True):
    """Appends a full King-to-Ace run of the given suit, bottom to top."""
    for rank in range(KING, ACE - 1, -1):
        stack.append(Card(suit, rank, faceUp))


def shuffle(cards, rng=None):
    """
    In-place Fisher-Yates shuffle, walking from the last index down to 1.

    :param rng: anything with ``randrange``, defaults to the module-level random source
    """
    pick = rng if rng is not None else random
    for i in range(len(cards) - 1, 0, -1):
        j = pick.randrange(i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def buildDeck(variant, rng=None):
    """
    Builds the 104 face-down cards of the given suit-count variant and shuffles them.
    """
    if variant not in VARIANT_SUITS:
        raise ValueError(f"unsupported variant: {variant!r}, expected one of {sorted(VARIANT_SUITS)}")
    deck = []
    for suit in VARIANT_SUITS[variant]:
        for rank in range(ACE, KING + 1):
            deck.append(Card(suit, rank))
    return shuffle(deck, rng)
