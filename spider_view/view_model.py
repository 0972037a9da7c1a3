from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    id: str
    suit: str
    rank: int
    face_up: bool


@dataclass(frozen=True)
class PileView:
    cards: tuple[CardView, ...]

    @property
    def top(self):
        return self.cards[-1] if self.cards else None


@dataclass(frozen=True)
class GameViewModel:
    variant: int | None
    status: str
    stock_count: int
    deals_remaining: int
    completed_count: int
    move_count: int
    undo_count: int
    can_undo: bool
    deal_allowed: bool
    elapsed_sec: float
    piles: tuple[PileView, ...]


@dataclass(frozen=True)
class EventView:
    type: str
    payload: dict
