from spider.Core import CallDeal, CardMove, Core, FreeStack, GameEvent, RevealTop
from spider_view.view_model import CardView, EventView, GameViewModel, PileView


class CoreAdapter:
    """Bridges the engine state/events to a renderer-friendly model."""

    @staticmethod
    def card_view(card) -> CardView:
        return CardView(id=card.id, suit=card.suit, rank=card.rank, face_up=card.faceUp)

    @staticmethod
    def snapshot(core: Core) -> GameViewModel:
        piles = []
        for pile in core.tableau:
            piles.append(PileView(cards=tuple(CoreAdapter.card_view(card) for card in pile)))
        return GameViewModel(
            variant=core.variant,
            status=core.status.value,
            stock_count=core.stockCount,
            deals_remaining=core.dealsRemaining,
            completed_count=core.completedCount,
            move_count=core.moveCount,
            undo_count=core.undoCount,
            can_undo=core.canUndo,
            deal_allowed=core.isDealAllowed(),
            elapsed_sec=core.elapsed(),
            piles=tuple(piles),
        )

    @staticmethod
    def event_to_view(event: GameEvent) -> EventView:
        if isinstance(event, CardMove):
            return EventView(
                type="MOVE",
                payload={"src": event.src, "dest": event.dest, "count": event.count},
            )
        if isinstance(event, CallDeal):
            return EventView(
                type="DEAL",
                payload={"draw_count": event.drawCount},
            )
        if isinstance(event, RevealTop):
            return EventView(
                type="REVEAL",
                payload={"pile": event.idx},
            )
        if isinstance(event, FreeStack):
            return EventView(
                type="COMPLETE_SUIT",
                payload={"pile": event.idx, "suit": event.suit},
            )
        return EventView(type="UNKNOWN", payload={"event": type(event).__name__})
