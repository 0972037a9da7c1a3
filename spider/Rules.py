from spider.Cards import KING, NUM_PER_SUIT


def lastOf(lst):
    if len(lst) == 0:
        return None
    return lst[len(lst) - 1]


def isValidPosition(tableau, s, idx):
    if s < 0 or s >= len(tableau):
        return False
    pile = tableau[s]
    if idx < 0 or idx >= len(pile):
        return False
    return True


def movableRun(pile, index):
    """
    Returns the run ``pile[index:]`` if it can be picked up as a unit, otherwise None.

    The run must start on a face-up card and every card above it must be face-up,
    of the same suit and exactly one rank lower than the card below it.
    """
    if index < 0 or index >= len(pile):
        return None
    base = pile[index]
    if not base.faceUp:
        return None
    for i in range(index + 1, len(pile)):
        upper = pile[i]
        if not upper.faceUp or not base.suitableAsSequenceFor(upper):
            return None
        base = upper
    return pile[index:]


def canStackOn(movingCard, destinationTop):
    # An empty pile accepts anything; suit does not matter across piles.
    if destinationTop is None:
        return True
    return destinationTop.faceUp and destinationTop.rank == movingCard.rank + 1


def isIndex(value):
    return isinstance(value, int) and not isinstance(value, bool)


def canMove(tableau, fromPile, fromIndex, toPile):
    if not (isIndex(fromPile) and isIndex(fromIndex) and isIndex(toPile)):
        return False
    if not isValidPosition(tableau, fromPile, fromIndex):
        return False
    if toPile < 0 or toPile >= len(tableau) or toPile == fromPile:
        return False
    run = movableRun(tableau[fromPile], fromIndex)
    if run is None:
        return False
    return canStackOn(run[0], lastOf(tableau[toPile]))


def completedSequenceAt(pile):
    """True if the top 13 cards of the pile read King down to Ace in a single suit, all face-up."""
    length = len(pile)
    if length < NUM_PER_SUIT:
        return False
    seq = pile[length - NUM_PER_SUIT:]
    suit = seq[0].suit
    for i, card in enumerate(seq):
        if not card.faceUp or card.suit != suit or card.rank != KING - i:
            return False
    return True


def runStart(pile):
    """Index of the lowest card of the longest movable run on top of the pile, or None."""
    idx = len(pile) - 1
    while idx >= 0 and movableRun(pile, idx) is not None:
        idx -= 1
    if idx == len(pile) - 1:
        return None
    return idx + 1


def legalMoves(tableau):
    """
    Lists every legal (fromPile, fromIndex, toPile) move, longest runs first.

    Moving a whole pile onto an empty pile is not listed.
    """
    moves = []
    for s, pile in enumerate(tableau):
        first = runStart(pile)
        if first is None:
            continue
        for start in range(first, len(pile)):
            card = pile[start]
            for dest, other in enumerate(tableau):
                if dest == s:
                    continue
                if len(other) == 0 and start == 0:
                    continue
                if canStackOn(card, lastOf(other)):
                    moves.append((s, start, dest))
    moves.sort(key=lambda m: len(tableau[m[0]]) - m[1], reverse=True)
    return moves
