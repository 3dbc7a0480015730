"""Property-based tests (Hypothesis) for make/undo and move generation.

Random legal game prefixes are played from the start position; every prefix
must unwind exactly and replay to the same position.
"""

from hypothesis import given, settings, strategies as st
from hypothesis.stateful import RuleBasedStateMachine, initialize, invariant, precondition, rule

from qirkat.adjacency import MAX_INDEX
from qirkat.game.board import Board
from qirkat.game.color import PieceColor


choices = st.lists(st.integers(min_value=0, max_value=1000), max_size=16)


def play_random(board, picks):
    played = []
    for pick in picks:
        moves = board.get_moves()
        if not moves:
            break
        mov = moves[pick % len(moves)]
        board.make_move(mov)
        played.append(mov)
    return played


@settings(max_examples=60, deadline=None)
@given(choices)
def test_undo_round_trip(picks):
    board = Board()
    start = Board(board)
    played = play_random(board, picks)
    end = Board(board)

    for _ in played:
        board.undo()
    assert board == start
    assert board.history == ()

    for mov in played:
        assert board.legal_move(mov)
        board.make_move(mov)
    assert board == end


@settings(max_examples=60, deadline=None)
@given(choices)
def test_generation_leaves_no_trace(picks):
    board = Board()
    play_random(board, picks)
    snapshot = [board.get(k) for k in range(MAX_INDEX + 1)]
    history = board.history

    moves = board.get_moves()

    assert [board.get(k) for k in range(MAX_INDEX + 1)] == snapshot
    assert board.history == history
    if moves and any(mov.is_jump() for mov in moves):
        assert all(mov.is_jump() for mov in moves)
    assert board.game_over == (not moves)


@settings(max_examples=40, deadline=None)
@given(choices)
def test_generated_chains_are_maximal(picks):
    board = Board()
    play_random(board, picks)
    for mov in board.get_moves():
        if mov.is_jump():
            assert board.check_jump(mov, allow_partial=False)


class QirkatGameMachine(RuleBasedStateMachine):
    """Plays and takes back moves at random, checking board invariants."""

    @initialize()
    def setup(self):
        self.board = Board()
        self.positions = []

    @precondition(lambda self: not self.board.game_over)
    @rule(pick=st.integers(min_value=0, max_value=1000))
    def play(self, pick):
        moves = self.board.get_moves()
        self.positions.append(Board(self.board))
        self.board.make_move(moves[pick % len(moves)])

    @precondition(lambda self: len(self.positions) > 0)
    @rule()
    def take_back(self):
        self.board.undo()
        assert self.board == self.positions.pop()

    @invariant()
    def cell_count(self):
        total = sum(self.board.count(color) for color in PieceColor)
        assert total == MAX_INDEX + 1

    @invariant()
    def history_matches(self):
        assert len(self.board.history) == len(self.positions)


QirkatGameMachine.TestCase.settings = settings(max_examples=30, stateful_step_count=20, deadline=None)
TestQirkatStateMachine = QirkatGameMachine.TestCase
