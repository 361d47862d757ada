"""
Tests for the game session state machine.
"""

import logging
import random
import unittest

from pydantic import ValidationError

from hexblokus.board import Cell
from hexblokus.commands import (
    CommandRejected, GameEnded, MoveTo, Pass, PickUp, PickUpAt, PieceDroppedOffBoard,
    PiecePickedUp, PiecePlaced, PlacementPreview, PlacementRejected, Release, Rotate, TurnPassed
)
from hexblokus.errors import ConfigurationError
from hexblokus.game import GamePhase, GameSession
from hexblokus.hex import Hex, Rotation
from hexblokus.layout import hex_to_pixel
from hexblokus.pieces import ALL_PIECES, BLOCKS_PER_PLAYER, PieceState
from hexblokus.placement import PlacementOutcome
from hexblokus.winner import WinnerOutcome
from schemas.game_config import GameConfig

PIECES_PER_PLAYER = len(ALL_PIECES)
MONOMINO = 17
DOMINO = 16


def handle(player: int, index: int) -> int:
    return player * PIECES_PER_PLAYER + index


def place(session: GameSession, piece_handle: int, anchor: Hex, rotation: Rotation = Rotation.ROT_0):
    session.update(PickUp(piece_handle))
    if rotation is not Rotation.ROT_0:
        session.update(Rotate(rotation))
    session.update(MoveTo(anchor))
    return session.update(Release())


class TestSessionSetup(unittest.TestCase):
    """Test session construction."""

    def test_defaults_to_six_players(self):
        """Test that a default session is a fresh 6-player game."""
        session = GameSession()
        self.assertEqual(session.player_count, 6)
        self.assertEqual(len(session.pieces), 6 * PIECES_PER_PLAYER)
        self.assertEqual(session.current_player, 0)
        self.assertEqual(session.pass_count, 0)
        self.assertEqual(session.phase, GamePhase.GAME)

    def test_catalog(self):
        """Test the piece catalog sizes."""
        self.assertEqual(PIECES_PER_PLAYER, 18)
        self.assertEqual(BLOCKS_PER_PLAYER, 72)
        self.assertEqual(ALL_PIECES[MONOMINO].size, 1)
        self.assertEqual(ALL_PIECES[DOMINO].size, 2)
        for piece in ALL_PIECES:
            self.assertEqual(piece.offsets[0], Hex(0, 0))

    def test_pieces_start_off_board(self):
        """Test that every piece starts free in its tray, off the board."""
        session = GameSession()
        for record in session.pieces:
            self.assertEqual(record.state, PieceState.FREE)
            self.assertTrue(all(hex not in session.board for hex in record.cells()))

    def test_bad_player_count(self):
        """Test that unsupported player counts are refused."""
        with self.assertRaises(ConfigurationError):
            GameSession.for_players(7)
        with self.assertRaises(ValidationError):
            GameConfig(player_count=1)


class TestPlacementFlow:
    """End-to-end placement through commands."""

    def test_off_board_then_start_zone(self):
        """Test an off-board drop followed by a placement on the start zone."""
        session = GameSession.for_players(6)
        piece = session.pieces[handle(0, MONOMINO)]
        before = session.board.copy()

        events = session.update(PickUp(piece.handle))
        assert events == [PiecePickedUp(handle=piece.handle, player=0)]

        events = session.update(MoveTo(Hex(40, 40)))
        assert events[0].outcome == PlacementOutcome.OFF_BOARD

        events = session.update(Release())
        assert events == [PieceDroppedOffBoard(handle=piece.handle, anchor=Hex(40, 40))]
        assert session.board == before
        assert session.current_player == 0
        assert piece.state == PieceState.FREE
        assert piece.anchor == Hex(40, 40)

        events = place(session, piece.handle, Hex(7, 7))
        assert len(events) == 1
        placed = events[0]
        assert isinstance(placed, PiecePlaced)
        assert placed.player == 0
        assert placed.cells == [Hex(7, 7)]
        assert 0 <= placed.cue < 5
        assert session.board.get(Hex(7, 7)) == Cell.occupied(0)
        assert piece.state == PieceState.PLACED
        assert session.current_player == 1
        assert session.selected is None

    def test_invalid_drop_restores_piece(self):
        """Test that an invalid drop puts the piece back where it was picked up."""
        session = GameSession.for_players(6)
        place(session, handle(0, MONOMINO), Hex(7, 7))

        piece = session.pieces[handle(1, DOMINO)]
        original_anchor = piece.anchor
        before = session.board.copy()

        session.update(PickUp(piece.handle))
        session.update(Rotate(Rotation.ROT_60_CW))
        preview = session.update(MoveTo(Hex(0, 0)))
        assert preview[0].outcome == PlacementOutcome.INVALID

        events = session.update(Release())
        assert events == [PlacementRejected(handle=piece.handle, anchor=original_anchor, rotation=Rotation.ROT_0)]
        assert piece.anchor == original_anchor
        assert piece.rotation == Rotation.ROT_0
        assert piece.state == PieceState.FREE
        assert session.board == before
        assert session.current_player == 1

    def test_rotation_changes_preview(self):
        """Test that rotating the dragged piece updates the preview."""
        session = GameSession.for_players(6)
        piece = session.pieces[handle(0, DOMINO)]
        session.update(PickUp(piece.handle))

        events = session.update(MoveTo(Hex(7, 7)))
        assert isinstance(events[0], PlacementPreview)
        assert events[0].cells == [Hex(7, 7), Hex(8, 6)]
        assert events[0].outcome == PlacementOutcome.INVALID

        events = session.update(Rotate(Rotation.ROT_60_CCW))
        assert events[0].cells == [Hex(7, 7), Hex(7, 6)]
        assert events[0].outcome == PlacementOutcome.VALID
        assert session.legality() == PlacementOutcome.VALID

        events = session.update(Release())
        assert isinstance(events[0], PiecePlaced)
        assert set(session.board.cells_of(0)) == {Hex(7, 6), Hex(7, 7)}

    def test_second_piece_must_touch_a_corner(self):
        """Test the corner rule through the session."""
        session = GameSession.for_players(2)
        place(session, handle(0, MONOMINO), Hex(8, 2))
        place(session, handle(1, MONOMINO), Hex(-8, -2))

        # player 0: edge contact is rejected, corner contact accepted
        events = place(session, handle(0, DOMINO), Hex(7, 2))
        assert isinstance(events[0], PlacementRejected)
        session.update(PickUp(handle(0, DOMINO)))
        session.update(MoveTo(Hex(7, 1)))
        session.update(Rotate(Rotation.ROT_180))
        events = session.update(Release())
        assert isinstance(events[0], PiecePlaced)
        assert events[0].cells == [Hex(7, 1), Hex(6, 2)]

    def test_pick_up_at_pointer(self):
        """Test picking up a piece by world point."""
        session = GameSession.for_players(3)
        piece = session.pieces[handle(0, MONOMINO)]
        events = session.update(PickUpAt(hex_to_pixel(piece.cells()[0])))
        assert events == [PiecePickedUp(handle=piece.handle, player=0)]

    def test_pick_up_at_empty_space(self):
        """Test that a pointer over no piece picks nothing up."""
        session = GameSession.for_players(3)
        events = session.update(PickUpAt(hex_to_pixel(Hex(0, 0))))
        assert isinstance(events[0], CommandRejected)
        assert session.selected is None

    def test_cue_comes_from_injected_random_source(self):
        """Test that the drop cue uses the injected random source."""
        class FixedRandom(random.Random):
            def randrange(self, *args, **kwargs):
                return 3

        session = GameSession(GameConfig(player_count=6), rng=FixedRandom())
        events = place(session, handle(0, MONOMINO), Hex(7, 7))
        assert events[0].cue == 3


class TestCommandRules:
    """Test commands that are not allowed."""

    def test_cannot_pick_up_another_players_piece(self):
        """Test that only the current player's pieces can be picked up."""
        session = GameSession.for_players(4)
        events = session.update(PickUp(handle(1, 0)))
        assert isinstance(events[0], CommandRejected)
        assert "player 1" in events[0].reason
        assert session.selected is None

    def test_only_one_piece_at_a_time(self):
        """Test that a second pickup is refused while dragging."""
        session = GameSession.for_players(4)
        session.update(PickUp(handle(0, 0)))
        events = session.update(PickUp(handle(0, 1)))
        assert isinstance(events[0], CommandRejected)
        assert session.selected == handle(0, 0)
        assert session.pieces[handle(0, 1)].state == PieceState.FREE

    def test_cannot_pick_up_placed_piece(self):
        """Test that placed pieces stay put."""
        session = GameSession.for_players(2)
        place(session, handle(0, MONOMINO), Hex(8, 2))
        session.update(Pass())
        events = session.update(PickUp(handle(0, MONOMINO)))
        assert isinstance(events[0], CommandRejected)

    def test_unknown_handle(self):
        """Test that an unknown handle is refused."""
        session = GameSession.for_players(2)
        events = session.update(PickUp(10_000))
        assert isinstance(events[0], CommandRejected)

    def test_move_without_selection(self):
        """Test that drag commands need a selected piece."""
        session = GameSession.for_players(2)
        for command in (MoveTo(Hex(0, 0)), Rotate(Rotation.ROT_60_CW), Release()):
            events = session.update(command)
            assert isinstance(events[0], CommandRejected)

    def test_cannot_pass_while_dragging(self):
        """Test that passing is refused while a piece is dragged."""
        session = GameSession.for_players(2)
        session.update(PickUp(handle(0, 0)))
        events = session.update(Pass())
        assert isinstance(events[0], CommandRejected)
        assert session.current_player == 0
        assert session.pass_count == 0


class TestPassAndGameEnd:
    """Test passing and the end of the game."""

    def test_pass_advances_turn(self):
        """Test that passing hands the turn to the next player."""
        session = GameSession.for_players(3)
        events = session.update(Pass())
        assert events == [TurnPassed(player=0, pass_count=1)]
        assert session.current_player == 1
        assert not session.is_over

    def test_everyone_passing_ends_the_game(self):
        """Test that a full round of passes ends the game."""
        session = GameSession.for_players(2)
        session.update(Pass())
        events = session.update(Pass())
        assert isinstance(events[-1], GameEnded)
        assert session.phase == GamePhase.GAME_END
        # both players still hold every piece
        assert events[-1].result.outcome == WinnerOutcome.UNDECIDED
        assert events[-1].result.tied_players == [0, 1]

    def test_placement_resets_pass_count(self):
        """Test that a placement resets the pass counter."""
        session = GameSession.for_players(2)
        session.update(Pass())
        assert session.pass_count == 1
        place(session, handle(1, MONOMINO), Hex(-8, -2))
        assert session.pass_count == 0
        session.update(Pass())
        assert not session.is_over

    def test_winner_has_fewest_blocks_left(self):
        """Test that the player with fewest hexes left wins."""
        session = GameSession.for_players(2)
        place(session, handle(0, MONOMINO), Hex(8, 2))
        session.update(Pass())
        events = session.update(Pass())
        result = events[-1].result
        assert result.outcome == WinnerOutcome.WINNER
        assert result.player == 0
        assert session.result is result

    def test_player_stats(self):
        """Test remaining material per player."""
        session = GameSession.for_players(2)
        place(session, handle(0, MONOMINO), Hex(8, 2))
        stats = {s.player: s for s in session.player_stats()}
        assert stats[0].blocks == BLOCKS_PER_PLAYER - 1
        assert stats[1].blocks == BLOCKS_PER_PLAYER
        assert stats[0].largest_piece == 5

    def test_commands_rejected_after_game_end(self):
        """Test that commands are refused once the game is over."""
        session = GameSession.for_players(2)
        session.update(Pass())
        session.update(Pass())
        events = session.update(PickUp(handle(0, 0)))
        assert isinstance(events[0], CommandRejected)
        assert events[0].reason == "game is over"

    def test_pass_with_legal_placement_logs_warning(self, caplog):
        """Test the warning for passing with a legal placement."""
        session = GameSession.for_players(2)
        with caplog.at_level(logging.WARNING, logger="hexblokus.game"):
            session.update(Pass())
        assert "legal placement" in caplog.text


class TestSnapshot:
    """Test the pydantic state snapshot."""

    def test_snapshot_of_new_game(self):
        """Test the snapshot of a fresh game."""
        session = GameSession.for_players(6)
        state = session.snapshot()
        assert state.player_count == 6
        assert state.phase == "game"
        assert len(state.board.cells) == len(session.board)
        assert state.board.occupied_count == 0
        assert len(state.players) == 6
        assert state.players[0].is_active
        assert state.players[0].blocks_remaining == BLOCKS_PER_PLAYER
        assert len(state.pieces) == 6 * PIECES_PER_PLAYER
        assert state.winner is None
        assert state.selected_outcome is None

    def test_snapshot_while_dragging_and_after_end(self):
        """Test the snapshot mid-drag and after the game ends."""
        session = GameSession.for_players(2)
        session.update(PickUp(handle(0, MONOMINO)))
        session.update(MoveTo(Hex(8, 2)))
        state = session.snapshot()
        assert state.selected_piece == handle(0, MONOMINO)
        assert state.selected_outcome == "valid"
        session.update(Release())
        session.update(Pass())
        session.update(Pass())
        state = session.snapshot()
        assert state.phase == "game_end"
        assert state.winner.outcome == "winner"
        assert state.winner.player == 0
        assert state.board.occupied_count == 1
        data = state.model_dump()
        assert data["players"][1]["blocks_remaining"] == BLOCKS_PER_PLAYER


if __name__ == '__main__':
    unittest.main()
