import unittest

from spider import Rules
from spider.Cards import CLUBS, HEARTS, SPADES, Card, extendStack


def visible(suit, rank):
    return Card(suit, rank, faceUp=True)


def hidden(suit, rank):
    return Card(suit, rank)


class MovableRunTestCase(unittest.TestCase):
    def test_run_is_slice_to_top(self):
        pile = [hidden(HEARTS, 2), visible(SPADES, 9), visible(SPADES, 8), visible(SPADES, 7)]
        run = Rules.movableRun(pile, 1)
        self.assertEqual([9, 8, 7], [c.rank for c in run])
        self.assertIs(pile[3], run[2])
        self.assertEqual([7], [c.rank for c in Rules.movableRun(pile, 3)])

    def test_face_down_start_is_not_movable(self):
        pile = [hidden(SPADES, 9), visible(SPADES, 8)]
        self.assertIsNone(Rules.movableRun(pile, 0))

    def test_broken_chain_is_not_movable(self):
        mixed_suit = [visible(SPADES, 9), visible(HEARTS, 8)]
        gap = [visible(SPADES, 9), visible(SPADES, 7)]
        ascending = [visible(SPADES, 7), visible(SPADES, 8)]
        self.assertIsNone(Rules.movableRun(mixed_suit, 0))
        self.assertIsNone(Rules.movableRun(gap, 0))
        self.assertIsNone(Rules.movableRun(ascending, 0))
        self.assertIsNotNone(Rules.movableRun(mixed_suit, 1))

    def test_face_down_card_above_breaks_run(self):
        pile = [visible(SPADES, 9), hidden(SPADES, 8)]
        self.assertIsNone(Rules.movableRun(pile, 0))

    def test_out_of_range_index(self):
        pile = [visible(SPADES, 9)]
        self.assertIsNone(Rules.movableRun(pile, 1))
        self.assertIsNone(Rules.movableRun(pile, -1))
        self.assertIsNone(Rules.movableRun([], 0))

    def test_run_start(self):
        pile = [visible(HEARTS, 10), visible(SPADES, 9), visible(SPADES, 8)]
        self.assertEqual(1, Rules.runStart(pile))
        self.assertIsNone(Rules.runStart([]))
        self.assertIsNone(Rules.runStart([hidden(SPADES, 3)]))


class DropTestCase(unittest.TestCase):
    def test_empty_destination_accepts_anything(self):
        for rank in range(1, 14):
            self.assertTrue(Rules.canStackOn(visible(CLUBS, rank), None))

    def test_rank_must_be_one_higher_regardless_of_suit(self):
        self.assertTrue(Rules.canStackOn(visible(SPADES, 5), visible(HEARTS, 6)))
        self.assertTrue(Rules.canStackOn(visible(SPADES, 5), visible(SPADES, 6)))
        self.assertFalse(Rules.canStackOn(visible(SPADES, 5), visible(SPADES, 7)))
        self.assertFalse(Rules.canStackOn(visible(SPADES, 6), visible(SPADES, 5)))
        self.assertFalse(Rules.canStackOn(visible(SPADES, 13), visible(SPADES, 1)))

    def test_face_down_destination_rejects(self):
        self.assertFalse(Rules.canStackOn(visible(SPADES, 5), hidden(SPADES, 6)))

    def test_can_move_checks_indices(self):
        tableau = [[visible(SPADES, 5)], [visible(HEARTS, 6)], []]
        self.assertTrue(Rules.canMove(tableau, 0, 0, 1))
        self.assertTrue(Rules.canMove(tableau, 0, 0, 2))
        self.assertFalse(Rules.canMove(tableau, 0, 0, 0))
        self.assertFalse(Rules.canMove(tableau, 0, 1, 1))
        self.assertFalse(Rules.canMove(tableau, 3, 0, 1))
        self.assertFalse(Rules.canMove(tableau, 0, 0, 3))
        self.assertFalse(Rules.canMove(tableau, 0, 0, -1))
        self.assertFalse(Rules.canMove(tableau, "0", 0, 1))
        self.assertFalse(Rules.canMove(tableau, 0, None, 1))
        self.assertFalse(Rules.canMove(tableau, 1, 0, 0))


class CompletionTestCase(unittest.TestCase):
    def full_run(self, suit=SPADES):
        pile = []
        extendStack(pile, suit)
        return pile

    def test_king_to_ace_same_suit_is_complete(self):
        self.assertTrue(Rules.completedSequenceAt(self.full_run()))
        self.assertTrue(Rules.completedSequenceAt([hidden(HEARTS, 4)] + self.full_run(HEARTS)))

    def test_short_pile_is_not_complete(self):
        self.assertFalse(Rules.completedSequenceAt(self.full_run()[:12]))

    def test_face_down_card_blocks_completion(self):
        pile = self.full_run()
        pile[0].faceUp = False
        self.assertFalse(Rules.completedSequenceAt(pile))

    def test_mixed_suits_block_completion(self):
        pile = self.full_run()
        pile[6] = visible(HEARTS, pile[6].rank)
        self.assertFalse(Rules.completedSequenceAt(pile))

    def test_sequence_must_be_on_top(self):
        pile = self.full_run() + [visible(SPADES, 5)]
        self.assertFalse(Rules.completedSequenceAt(pile))


class LegalMovesTestCase(unittest.TestCase):
    def test_lists_every_fitting_run(self):
        tableau = [
            [hidden(SPADES, 1), visible(SPADES, 7), visible(SPADES, 6)],
            [visible(HEARTS, 8)],
            [visible(CLUBS, 7)],
            [],
        ]
        moves = Rules.legalMoves(tableau)
        self.assertIn((0, 1, 1), moves)
        self.assertIn((0, 2, 2), moves)
        self.assertIn((0, 1, 3), moves)
        self.assertIn((2, 0, 1), moves)
        # a whole pile is never offered onto an empty one
        self.assertNotIn((1, 0, 3), moves)
        self.assertEqual((0, 1), moves[0][:2])
        for move in moves:
            self.assertTrue(Rules.canMove(tableau, *move))


if __name__ == "__main__":
    unittest.main()
