import enum
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Optional

from spider import Rules
from spider.Cards import NUM_PER_SUIT, VARIANT_SUITS, buildDeck
from spider.Rules import lastOf

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    variant: int = 1
    seed: Optional[int] = None
    pileCount: int = 10
    initialDealt: int = 54
    dealSize: int = 10
    sequencesToWin: int = 8

    def initialPileSizes(self):
        """Piles 0-3 get 6 cards, the rest 5, for the default 54-card deal."""
        base, extra = divmod(self.initialDealt, self.pileCount)
        return [base + 1 if i < extra else base for i in range(self.pileCount)]

    def makeRandom(self):
        if self.seed is None:
            return None
        return random.Random(self.seed)


class GameStatus(enum.Enum):
    IDLE = "Idle"
    PLAYING = "Playing"
    WON = "Won"


@dataclass
class GameState:
    """The whole mutable game: what undo snapshots capture and restore."""

    variant: int
    tableau: list = field(default_factory=list)
    stock: list = field(default_factory=list)
    completedCount: int = 0
    moveCount: int = 0
    startedAt: Optional[float] = None
    finishedAt: Optional[float] = None

    def copy(self):
        return GameState(
            variant=self.variant,
            tableau=[[card.copy() for card in pile] for pile in self.tableau],
            stock=[card.copy() for card in self.stock],
            completedCount=self.completedCount,
            moveCount=self.moveCount,
            startedAt=self.startedAt,
            finishedAt=self.finishedAt,
        )

    def cardCount(self):
        return len(self.stock) + sum(len(pile) for pile in self.tableau)


@dataclass(frozen=True)
class MoveResult:
    success: bool
    completedSequence: bool = False
    won: bool = False


@dataclass(frozen=True)
class DealResult:
    success: bool
    won: bool = False


@dataclass(frozen=True)
class UndoResult:
    success: bool


class GameEvent:
    """Notification sent to the registered interface after each change."""


class CardMove(GameEvent):
    def __init__(self, src: (int, int), dest: (int, int), count: int):
        self.src = src
        self.dest = dest
        self.count = count


class CallDeal(GameEvent):
    def __init__(self, drawCount: int):
        self.drawCount = drawCount


class FreeStack(GameEvent):
    def __init__(self, idx, suit):
        self.idx = idx
        self.suit = suit


class RevealTop(GameEvent):
    def __init__(self, idx):
        self.idx = idx


class HistoryRecorder:
    """Stack of full-state snapshots, one per mutating action."""

    def __init__(self):
        self.lst = []

    def __len__(self):
        return len(self.lst)

    def log(self, state: GameState):
        self.lst.append(state.copy())

    def canUndo(self):
        return len(self.lst) > 0

    def undo(self) -> Optional[GameState]:
        if not self.lst:
            return None
        return self.lst.pop()

    def clear(self):
        self.lst = []


class Core:
    """
    Spider solitaire engine.

    applyMove / dealFromStock / undo : player actions, validated, never raise on illegal input.
    do*** : actual operation on the live state, no validation or bookkeeping.
    """

    def __init__(self, config: GameConfig = None, rng=None, clock=time.monotonic):
        self.config = config if config is not None else GameConfig()
        # one generator per core: a seed pins the sequence of games, not every game
        self.rng = rng if rng is not None else self.config.makeRandom()
        self.clock = clock
        self.interface = None

        self.state: Optional[GameState] = None
        self.status = GameStatus.IDLE
        self.history = HistoryRecorder()
        self.undoCount = 0

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def _notify(self, event: GameEvent):
        if self.interface is not None:
            self.interface.onEvent(event)

    # --- lifecycle ---

    def newGame(self, variant: int = None):
        if variant is None:
            variant = self.config.variant
        if variant not in VARIANT_SUITS:
            raise ValueError(f"unsupported variant: {variant!r}, expected one of {sorted(VARIANT_SUITS)}")
        deck = buildDeck(variant, self.rng)

        self.state = GameState(variant=variant, startedAt=self.clock())
        self.state.tableau = [[] for _ in range(self.config.pileCount)]
        self.dealInitial(deck)
        self.state.stock = deck
        self.history.clear()
        self.undoCount = 0
        self.status = GameStatus.PLAYING
        logger.info("new game: variant=%d stock=%d", variant, len(deck))
        if self.interface is not None:
            self.interface.onStart()

    def dealInitial(self, deck):
        tableau = self.state.tableau
        for s, count in enumerate(self.config.initialPileSizes()):
            for _ in range(count):
                tableau[s].append(deck.pop())
            lastOf(tableau[s]).faceUp = True

    def _statusOf(self, state: GameState):
        if state.completedCount >= self.config.sequencesToWin:
            return GameStatus.WON
        return GameStatus.PLAYING

    def loadState(self, state: GameState):
        """Installs a caller-built position, e.g. a prepared test layout."""
        self.state = state.copy()
        if self.state.startedAt is None:
            self.state.startedAt = self.clock()
        self.history.clear()
        self.undoCount = 0
        self.status = self._statusOf(self.state)
        if self.interface is not None:
            self.interface.onStart()

    # --- queries ---

    @property
    def variant(self):
        return self.state.variant if self.state is not None else None

    @property
    def tableau(self):
        if self.state is None:
            return ()
        return tuple(tuple(card.copy() for card in pile) for pile in self.state.tableau)

    @property
    def stockCount(self):
        return len(self.state.stock) if self.state is not None else 0

    @property
    def dealsRemaining(self):
        return self.stockCount // self.config.dealSize

    @property
    def completedCount(self):
        return self.state.completedCount if self.state is not None else 0

    @property
    def moveCount(self):
        return self.state.moveCount if self.state is not None else 0

    @property
    def canUndo(self):
        return self.status is not GameStatus.IDLE and self.history.canUndo()

    def isWon(self):
        return self.status is GameStatus.WON

    def elapsed(self) -> float:
        if self.state is None or self.state.startedAt is None:
            return 0.0
        end = self.state.finishedAt if self.state.finishedAt is not None else self.clock()
        return max(0.0, end - self.state.startedAt)

    def snapshot(self) -> Optional[GameState]:
        return self.state.copy() if self.state is not None else None

    def topCard(self, pile: int):
        card = lastOf(self.state.tableau[pile])
        return card.copy() if card is not None else None

    @staticmethod
    def canStackOn(movingCard, destinationTop):
        return Rules.canStackOn(movingCard, destinationTop)

    def movableRun(self, pile: int, index: int):
        """Copies of the cards in the run starting at index, or None if it cannot be picked up."""
        if self.state is None or not (Rules.isIndex(pile) and Rules.isIndex(index)):
            return None
        if not Rules.isValidPosition(self.state.tableau, pile, index):
            return None
        run = Rules.movableRun(self.state.tableau[pile], index)
        if run is None:
            return None
        return [card.copy() for card in run]

    def canMove(self, fromPile: int, fromIndex: int, toPile: int) -> bool:
        if self.status is not GameStatus.PLAYING:
            return False
        return Rules.canMove(self.state.tableau, fromPile, fromIndex, toPile)

    def isDealAllowed(self) -> bool:
        if self.status is not GameStatus.PLAYING:
            return False
        if len(self.state.stock) < self.config.dealSize:
            return False
        # classic rule: no dealing onto an empty pile
        for pile in self.state.tableau:
            if len(pile) == 0:
                return False
        return True

    def hints(self):
        if self.status is not GameStatus.PLAYING:
            return []
        return Rules.legalMoves(self.state.tableau)

    def hasValidMove(self) -> bool:
        return len(self.hints()) > 0 or self.isDealAllowed()

    # --- player actions ---

    def applyMove(self, fromPile: int, fromIndex: int, toPile: int) -> MoveResult:
        if not self.canMove(fromPile, fromIndex, toPile):
            logger.debug("rejected move %r:%r -> %r", fromPile, fromIndex, toPile)
            return MoveResult(success=False)
        self.history.log(self.state)
        self.doMove((fromPile, fromIndex), toPile)
        self.doReveal(fromPile)
        completed = self.checkComplete(toPile)
        self.state.moveCount += 1
        won = self.checkWin()
        return MoveResult(success=True, completedSequence=completed, won=won)

    def dealFromStock(self) -> DealResult:
        if not self.isDealAllowed():
            logger.debug("rejected deal: stock=%d", self.stockCount)
            return DealResult(success=False)
        self.history.log(self.state)
        self.doDeal()
        for s in range(len(self.state.tableau)):
            self.checkComplete(s)
        self.state.moveCount += 1
        won = self.checkWin()
        return DealResult(success=True, won=won)

    def undo(self) -> UndoResult:
        if self.status is GameStatus.IDLE:
            return UndoResult(success=False)
        previous = self.history.undo()
        if previous is None:
            return UndoResult(success=False)
        self.state = previous
        self.status = self._statusOf(previous)
        self.undoCount += 1
        logger.info("undo: %d snapshots left", len(self.history))
        if self.interface is not None:
            self.interface.onUndo()
        return UndoResult(success=True)

    # --- primitive operations ---

    def doMove(self, src: (int, int), dest: int):
        tableau = self.state.tableau
        srcPile = tableau[src[0]]
        run = srcPile[src[1]:]
        destPair = (dest, len(tableau[dest]))
        del srcPile[src[1]:]
        tableau[dest].extend(run)
        self._notify(CardMove(src, destPair, len(run)))

    def doReveal(self, idx: int) -> bool:
        card = lastOf(self.state.tableau[idx])
        if card is None or card.faceUp:
            return False
        card.faceUp = True
        self._notify(RevealTop(idx))
        return True

    def doDeal(self):
        stock = self.state.stock
        count = self.config.dealSize
        for pile in self.state.tableau[:count]:
            card = stock.pop()
            card.faceUp = True
            pile.append(card)
        self._notify(CallDeal(count))

    def checkComplete(self, idx: int) -> bool:
        pile = self.state.tableau[idx]
        if not Rules.completedSequenceAt(pile):
            return False
        suit = lastOf(pile).suit
        del pile[len(pile) - NUM_PER_SUIT:]
        self.state.completedCount += 1
        self._notify(FreeStack(idx, suit))
        self.doReveal(idx)
        return True

    def checkWin(self) -> bool:
        if self.state.completedCount < self.config.sequencesToWin:
            return False
        self.state.finishedAt = self.clock()
        self.status = GameStatus.WON
        logger.info("game won: moves=%d elapsed=%.1fs", self.state.moveCount, self.elapsed())
        if self.interface is not None:
            self.interface.onWin()
        return True
