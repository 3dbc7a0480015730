"""Command-line interface for playing Qirkat against an AI opponent."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .ai import MinimaxAgent
from .config import PLAYER_KINDS, ConfigError, Settings
from .game.board import Board, BoardFormatError, UsageError
from .game.color import PieceColor
from .game.move import MoveFormatError, parse_move


LOG = logging.getLogger("qirkat.cli")

HELP_TEXT = """\
Enter a move such as c2-c3 or a3-c5-c3, or one of:
  undo   take back your last move
  dump   show the board
  moves  list the legal moves
  help   show this message
  quit   leave the game"""


def _render_board(board: Board) -> None:
    print()
    print(board.render(legend=True))
    print()


def _prompt(prompt: str) -> Optional[str]:
    try:
        value = input(prompt)
    except EOFError:
        return None
    return value.strip()


def _human_turn(board: Board, player: PieceColor) -> bool:
    _render_board(board)
    while True:
        text = _prompt(f"{player}: ")
        if text is None or text.lower() in {"q", "quit", "exit"}:
            return False
        if not text:
            continue

        command = text.lower()
        if command == "help":
            print(HELP_TEXT)
            continue
        if command == "dump":
            _render_board(board)
            continue
        if command == "moves":
            print(" ".join(str(mov) for mov in board.get_moves()))
            continue
        if command == "undo":
            if not board.history:
                print("Nothing to undo.")
                continue
            board.undo()
            while board.history and board.whose_move is not player:
                board.undo()
            return True

        try:
            mov = parse_move(text)
        except MoveFormatError:
            print(f"Cannot read {text!r}. Type 'help' for the move format.")
            continue

        if not board.legal_move(mov):
            print(f"Illegal move: {mov}. Try again.")
            continue

        board.make_move(mov)
        return True


def _ai_turn(board: Board, agent: MinimaxAgent) -> bool:
    mov = agent.choose_move(board)
    if mov is None:
        return False
    board.make_move(mov)
    print(f"{agent.player} moves {mov}.")
    return True


def _announce_winner(board: Board) -> None:
    print(f"{board.whose_move.opposite()} wins.")


def play(board: Board, agents: Dict[PieceColor, Optional[MinimaxAgent]]) -> Optional[PieceColor]:
    """Run the turn loop until the game ends or a human quits.

    ``agents`` maps each side to its AI, or None for a manual player.
    Returns the winner, or None if the game was abandoned.
    """

    while not board.game_over:
        player = board.whose_move
        agent = agents.get(player)
        if agent is None:
            if not _human_turn(board, player):
                return None
        elif not _ai_turn(board, agent):
            return None

    _render_board(board)
    _announce_winner(board)
    LOG.info("Game over after %d moves", len(board.history))
    return board.whose_move.opposite()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Qirkat on the command line")
    parser.add_argument("--white", choices=PLAYER_KINDS, help="Who plays white (default manual)")
    parser.add_argument("--black", choices=PLAYER_KINDS, help="Who plays black (default ai)")
    parser.add_argument("--depth", type=int, help="Search depth for AI players")
    parser.add_argument("--log-level", help="Logging level (default WARNING)")
    parser.add_argument("--board", help="Starting position: 25 characters of b, w or -")
    parser.add_argument("--next", dest="next_move", help="Side to move in --board (white or black)")
    return parser


def _setup_board(settings: Settings) -> Board:
    board = Board()
    if settings.board is not None:
        board.set_pieces(settings.board, PieceColor.parse(settings.next_move))
    return board


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env().with_args(args)
    except ConfigError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    try:
        board = _setup_board(settings)
    except (BoardFormatError, UsageError) as exc:
        parser.error(str(exc))

    agents: Dict[PieceColor, Optional[MinimaxAgent]] = {}
    for color, kind in ((PieceColor.WHITE, settings.white), (PieceColor.BLACK, settings.black)):
        agents[color] = MinimaxAgent(color, depth=settings.depth) if kind == "ai" else None
        LOG.info("%s is played by %s", color, agents[color].description if agents[color] else "a human")

    play(board, agents)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
