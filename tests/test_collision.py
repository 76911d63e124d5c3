from cubes.game import Action, Collision, Tetromino, TetrominoType, check_collision, move_piece
from cubes.game.collision import SOFT_DROP_STEPS
from tests.helpers import occupied


def _o(x=3, y=0):
    return Tetromino(TetrominoType.O, x=x, y=y)


def test_free_pose(board):
    piece = _o()
    assert check_collision(board, piece, piece.x, piece.y, piece.rotation) is Collision.NONE


def test_side_walls(board):
    # O occupies box columns 1 and 2
    piece = _o()
    assert check_collision(board, piece, -1, 0, 0) is Collision.NONE
    assert check_collision(board, piece, -2, 0, 0) is Collision.BLOCKED_SIDE
    assert check_collision(board, piece, 7, 0, 0) is Collision.NONE
    assert check_collision(board, piece, 8, 0, 0) is Collision.BLOCKED_SIDE


def test_floor(board):
    piece = _o()
    assert check_collision(board, piece, 3, 20, 0) is Collision.NONE
    assert check_collision(board, piece, 3, 21, 0) is Collision.BLOCKED_BOTTOM_OR_STACK


def test_stack(board):
    board.cells[23, 1] = True
    piece = _o(x=-1, y=19)
    assert check_collision(board, piece, -1, 20, 0) is Collision.BLOCKED_BOTTOM_OR_STACK


def test_side_takes_precedence_over_stack(board):
    board.cells[:, 1:] = True
    # vertical I sits in box column 1; rotation 0 spans box columns 0..3
    piece = Tetromino(TetrominoType.I, rotation=1, x=-1, y=0)
    assert check_collision(board, piece, -1, 0, 0) is Collision.BLOCKED_SIDE
    assert check_collision(board, piece, -1, 0, 2) is Collision.BLOCKED_SIDE

    result = move_piece(board, piece, Action.ROTATE_CCW)
    assert result.piece == piece
    assert not result.locked


def test_rotation_blocked_by_stack_keeps_pose(board):
    # horizontal I on row 2, the vertical one would need column 4 rows 0..3
    piece = Tetromino(TetrominoType.I, rotation=0, x=3, y=0)
    board.cells[0, 4] = True
    assert check_collision(board, piece, 3, 0, 1) is Collision.BLOCKED_ROTATION

    result = move_piece(board, piece, Action.ROTATE_CW)
    assert result.piece.rotation == 0
    assert not result.locked
    assert occupied(board) == [(4, 0)]


def test_rotation_revalidates_current_shape(board):
    piece = Tetromino(TetrominoType.I, rotation=0, x=3, y=0)
    board.cells[0, 4] = True
    board.cells[2, 3] = True
    assert check_collision(board, piece, 3, 0, 1) is Collision.BLOCKED_BOTTOM_OR_STACK


def test_rotation_above_the_stack_never_locks(board):
    piece = Tetromino(TetrominoType.T, rotation=0, x=3, y=5)
    result = move_piece(board, piece, Action.ROTATE_CW)
    assert not result.locked
    assert not board.cells.any()


def test_rotation_on_the_floor_commits_then_locks(board):
    piece = Tetromino(TetrominoType.T, rotation=0, x=3, y=20)
    result = move_piece(board, piece, Action.ROTATE_CW)
    assert result.locked
    assert result.piece.rotation == 1
    assert occupied(board) == [(3, 22), (4, 21), (4, 22), (4, 23)]


def test_rotation_commits_when_free(board):
    piece = Tetromino(TetrominoType.T, rotation=0, x=3, y=5)
    assert move_piece(board, piece, Action.ROTATE_CW).piece.rotation == 1
    assert move_piece(board, piece, Action.ROTATE_CCW).piece.rotation == 3


def test_lateral_moves(board):
    piece = _o()
    assert move_piece(board, piece, Action.LEFT).piece.x == 2
    assert move_piece(board, piece, Action.RIGHT).piece.x == 4


def test_wall_bounce_keeps_piece_in_bounds(board):
    piece = _o(x=-1)
    result = move_piece(board, piece, Action.LEFT)
    assert result.piece.x == -1
    assert not result.locked

    piece = _o(x=7)
    assert move_piece(board, piece, Action.RIGHT).piece.x == 7


def test_lateral_move_into_stack_is_rejected(board):
    board.cells[22, 6] = True
    piece = _o(x=3, y=19)
    result = move_piece(board, piece, Action.RIGHT)
    assert result.piece.x == 3
    assert not result.locked


def test_hard_drop_locks_on_floor(board):
    result = move_piece(board, _o(), Action.HARD_DROP)
    assert result.locked
    assert result.piece.y == 20
    assert occupied(board) == [(4, 22), (4, 23), (5, 22), (5, 23)]


def test_hard_drop_slides_to_rest_on_stack(board):
    board.cells[10, 4] = True
    result = move_piece(board, _o(), Action.HARD_DROP)
    assert result.locked
    assert result.piece.y == 6
    assert board.cells[8:10, 4:6].all()


def test_soft_drop_descends_fixed_steps(board):
    result = move_piece(board, _o(), Action.SOFT_DROP)
    assert SOFT_DROP_STEPS == 15
    assert result.piece.y == 15
    assert not result.locked
    assert not board.cells.any()


def test_soft_drop_locks_when_it_reaches_the_floor(board):
    result = move_piece(board, _o(y=10), Action.SOFT_DROP)
    assert result.locked
    assert result.piece.y == 20


def test_gravity_rows(board):
    result = move_piece(board, _o(), Action.NONE, gravity_rows=2)
    assert result.piece.y == 2
    assert not result.locked


def test_gravity_locks_resting_piece(board):
    result = move_piece(board, _o(y=20), Action.NONE, gravity_rows=1)
    assert result.locked
    assert board.cells[22:24, 4:6].all()


def test_resting_piece_locks_without_gravity(board):
    result = move_piece(board, _o(y=20), Action.NONE, gravity_rows=0)
    assert result.locked
    assert result.piece.y == 20


def test_no_gravity_keeps_a_free_piece_in_place(board):
    result = move_piece(board, _o(y=5), Action.NONE, gravity_rows=0)
    assert result.piece == _o(y=5)
    assert not result.locked


def test_pose_inside_the_stack_locks_before_moving(board):
    board.cells[3, 4] = True
    piece = _o()
    for action in (Action.NONE, Action.RIGHT, Action.ROTATE_CW):
        scratch = board.copy()
        result = move_piece(scratch, piece, action)
        assert result.locked
        assert result.piece == piece
        assert scratch.cells[2:4, 4:6].all()


def test_unknown_action_is_a_no_op(board):
    piece = _o()
    assert move_piece(board, piece, "teleport").piece == piece
    assert move_piece(board, piece, 42).piece == piece
