"""
Game session: board, turn order, piece drag state and end of game.

The host drives a session by sending commands to ``update`` once per input
event. Each command is handled in full before the next one: legality is
always decided before the board is touched.
"""

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, Optional

from schemas.game_config import GameConfig
from schemas.state_update import (
    BoardState, CellState, GameState, HexPosition,
    PieceState as PieceStateModel, PlayerState, WinnerState
)

from .board import Board, CellKind
from .commands import (
    Command, CommandRejected, Event, GameEnded, MoveTo, Pass, PickUp, PickUpAt,
    PieceDroppedOffBoard, PiecePickedUp, PiecePlaced, PlacementPreview,
    PlacementRejected, Release, Rotate, TurnPassed
)
from .errors import ConfigurationError
from .layout import player_color, point_in_hex
from .pieces import PieceRecord, PieceState, spawn_pieces
from .placement import PlacementOutcome, classify_placement, commit_placement, has_legal_placement
from .topology import SUPPORTED_PLAYER_COUNTS, build_board
from .winner import PlayerStats, WinnerResult, determine_winner

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    GAME = "game"
    GAME_END = "game_end"


class GameSession:
    """
    One game from setup to result.

    Pieces live in a plain list and are addressed by handle (their index).
    At most one piece is in the DRAGGING state at any time.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        """
        Set up the board and spawn every player's pieces.

        Args:
            config: Game configuration (defaults to a 6-player game)
            rng: Random source for drop sound cues; seeded from config.seed
                when omitted

        Raises:
            ConfigurationError: If the player count has no board topology
        """
        self.config = config or GameConfig()
        self.player_count = self.config.player_count
        self.board: Board = build_board(self.player_count)
        self.pieces: List[PieceRecord] = spawn_pieces(self.player_count)
        self.current_player = 0
        self.pass_count = 0
        self.phase = GamePhase.GAME
        self.selected: Optional[int] = None
        self.result: Optional[WinnerResult] = None
        self.rng = rng or random.Random(self.config.seed)

        self._handlers: Dict[type, Callable[[Command], List[Event]]] = {
            PickUp: self._pick_up,
            PickUpAt: self._pick_up_at,
            MoveTo: self._move_to,
            Rotate: self._rotate,
            Release: self._release,
            Pass: self._pass,
        }
        logger.info(f"Game session created for {self.player_count} players ({len(self.board)} hexes)")

    @classmethod
    def for_players(cls, player_count: int, seed: Optional[int] = None) -> 'GameSession':
        """Shortcut that reports bad player counts as ConfigurationError."""
        if player_count not in SUPPORTED_PLAYER_COUNTS:
            raise ConfigurationError(f"Unsupported player count {player_count}", player_count=player_count)
        return cls(GameConfig(player_count=player_count, seed=seed))

    # Queries

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.GAME_END

    def selected_piece(self) -> Optional[PieceRecord]:
        return self.pieces[self.selected] if self.selected is not None else None

    def pieces_of(self, player: int, state: Optional[PieceState] = None) -> List[PieceRecord]:
        return [
            p for p in self.pieces
            if p.owner == player and (state is None or p.state is state)
        ]

    def remaining_pieces(self, player: int) -> List[PieceRecord]:
        """Pieces of ``player`` not yet placed (free or being dragged)."""
        return [p for p in self.pieces_of(player) if p.state is not PieceState.PLACED]

    def legality(self) -> Optional[PlacementOutcome]:
        """Classification of the dragged piece at its current position."""
        record = self.selected_piece()
        if record is None:
            return None
        return classify_placement(self.board, record.cells(), record.owner)

    def player_stats(self) -> List[PlayerStats]:
        """Remaining material per player; players with nothing left are skipped."""
        stats = []
        for player in range(self.player_count):
            remaining = self.remaining_pieces(player)
            if not remaining:
                continue
            stats.append(PlayerStats(
                player=player,
                blocks=sum(p.size for p in remaining),
                largest_piece=max(p.size for p in remaining),
            ))
        return stats

    # Commands

    def update(self, command: Command) -> List[Event]:
        """
        Apply one host command.

        Returns:
            Events for the host to act on. A command that is not allowed in
            the current state yields a single CommandRejected event.
        """
        if self.is_over:
            return self._reject(command, "game is over")
        handler = self._handlers.get(type(command))
        if handler is None:
            return self._reject(command, f"unknown command {type(command).__name__}")
        return handler(command)

    def _reject(self, command: Command, reason: str) -> List[Event]:
        logger.warning(f"Rejected {command}: {reason}")
        return [CommandRejected(command=command, reason=reason)]

    def _pick_up(self, command: PickUp) -> List[Event]:
        if self.selected is not None:
            return self._reject(command, f"piece {self.selected} is already selected")
        if not 0 <= command.handle < len(self.pieces):
            return self._reject(command, f"no piece with handle {command.handle}")

        record = self.pieces[command.handle]
        if record.owner != self.current_player:
            return self._reject(command, f"piece belongs to player {record.owner}, not player {self.current_player}")
        if record.state is not PieceState.FREE:
            return self._reject(command, f"piece is {record.state.value}")

        record.save_transform()
        record.state = PieceState.DRAGGING
        self.selected = record.handle
        logger.debug(f"Player {record.owner} picked up piece {record.handle} ({record.piece.name})")
        return [PiecePickedUp(handle=record.handle, player=record.owner)]

    def _pick_up_at(self, command: PickUpAt) -> List[Event]:
        if self.selected is not None:
            return self._reject(command, f"piece {self.selected} is already selected")
        for record in self.pieces_of(self.current_player, PieceState.FREE):
            if any(point_in_hex(command.point, hex) for hex in record.cells()):
                return self._pick_up(PickUp(record.handle))
        return self._reject(command, f"no free piece of player {self.current_player} at {command.point}")

    def _preview(self, record: PieceRecord) -> List[Event]:
        cells = record.cells()
        outcome = classify_placement(self.board, cells, record.owner)
        return [PlacementPreview(handle=record.handle, cells=cells, outcome=outcome)]

    def _move_to(self, command: MoveTo) -> List[Event]:
        record = self.selected_piece()
        if record is None:
            return self._reject(command, "no piece selected")
        record.anchor = command.anchor
        return self._preview(record)

    def _rotate(self, command: Rotate) -> List[Event]:
        record = self.selected_piece()
        if record is None:
            return self._reject(command, "no piece selected")
        record.rotation = record.rotation.then(command.rotation)
        return self._preview(record)

    def _release(self, command: Release) -> List[Event]:
        record = self.selected_piece()
        if record is None:
            return self._reject(command, "no piece selected")

        cells = record.cells()
        outcome = classify_placement(self.board, cells, record.owner)
        self.selected = None

        if outcome is PlacementOutcome.VALID:
            commit_placement(self.board, cells, record.owner)
            record.state = PieceState.PLACED
            player = record.owner
            self.pass_count = 0
            self.current_player = (self.current_player + 1) % self.player_count
            cue = self.rng.randrange(self.config.cue_count) if self.config.cue_count else 0
            logger.info(f"Player {player} placed piece {record.handle} ({record.piece.name}) at {cells}")
            return [PiecePlaced(handle=record.handle, player=player, cells=cells, cue=cue)]

        record.state = PieceState.FREE
        if outcome is PlacementOutcome.INVALID:
            record.restore_transform()
            logger.info(f"Player {record.owner} placement of piece {record.handle} rejected at {cells}")
            return [PlacementRejected(handle=record.handle, anchor=record.anchor, rotation=record.rotation)]

        logger.debug(f"Piece {record.handle} dropped off the board at {record.anchor}")
        return [PieceDroppedOffBoard(handle=record.handle, anchor=record.anchor)]

    def _pass(self, command: Pass) -> List[Event]:
        if self.selected is not None:
            return self._reject(command, "cannot pass while dragging a piece")

        player = self.current_player
        if self.config.warn_on_pass_with_moves:
            remaining = [p.piece for p in self.remaining_pieces(player)]
            if has_legal_placement(self.board, remaining, player):
                logger.warning(f"Player {player} is passing but has a legal placement available")

        self.current_player = (self.current_player + 1) % self.player_count
        self.pass_count += 1
        logger.info(f"Player {player} passed ({self.pass_count}/{self.player_count}); turn advanced to {self.current_player}")
        events: List[Event] = [TurnPassed(player=player, pass_count=self.pass_count)]

        if self.pass_count >= self.player_count:
            events.append(self._end_game())
        return events

    def _end_game(self) -> GameEnded:
        self.phase = GamePhase.GAME_END
        self.result = determine_winner(self.player_stats())
        if self.result.has_winner:
            logger.info(f"Winner is player {self.result.player}")
        else:
            logger.info(f"No winner ({self.result.outcome.value})")
        return GameEnded(result=self.result)

    # Snapshot

    def snapshot(self) -> GameState:
        """Complete state as a pydantic model for the UI layer."""
        cells = [
            CellState(q=hex.q, r=hex.r, kind=cell.kind.value, player=cell.player)
            for hex, cell in self.board.items()
        ]
        stats = {s.player: s for s in self.player_stats()}
        players = [
            PlayerState(
                player=player,
                color=player_color(player),
                blocks_remaining=stats[player].blocks if player in stats else 0,
                largest_piece=stats[player].largest_piece if player in stats else 0,
                pieces_remaining=[p.handle for p in self.remaining_pieces(player)],
                is_active=player == self.current_player and not self.is_over,
            )
            for player in range(self.player_count)
        ]
        pieces = [
            PieceStateModel(
                handle=p.handle,
                piece_id=p.piece.id,
                name=p.piece.name,
                owner=p.owner,
                size=p.size,
                state=p.state.value,
                anchor=HexPosition(q=p.anchor.q, r=p.anchor.r),
                rotation_degrees_cw=p.rotation.degrees_cw,
                cells=[HexPosition(q=h.q, r=h.r) for h in p.cells()],
            )
            for p in self.pieces
        ]
        outcome = self.legality()
        winner = None
        if self.result is not None:
            winner = WinnerState(
                outcome=self.result.outcome.value,
                player=self.result.player,
                tied_players=self.result.tied_players,
            )
        return GameState(
            player_count=self.player_count,
            phase=self.phase.value,
            current_player=self.current_player,
            pass_count=self.pass_count,
            board=BoardState(cells=cells, occupied_count=self.board.count(CellKind.OCCUPIED)),
            players=players,
            pieces=pieces,
            selected_piece=self.selected,
            selected_outcome=outcome.value if outcome else None,
            winner=winner,
        )
