import pytest

from falling_blocks.game import BASE_SHAPES, PieceFactory, TetrominoType


@pytest.mark.parametrize(
    "kind,expected_x",
    [(TetrominoType.I, 3), (TetrominoType.O, 4), (TetrominoType.T, 4), (TetrominoType.J, 4)],
)
def test_spawn_is_horizontally_centred(kind, expected_x):
    piece = PieceFactory(10, kinds=[kind]).create()
    assert piece.kind == kind
    assert (piece.x, piece.y) == (expected_x, 0)


def test_created_shape_is_writable_copy():
    piece = PieceFactory(10, kinds=[TetrominoType.S]).create()
    piece.shape[2, 2] = True
    assert not BASE_SHAPES[TetrominoType.S][2, 2]


def test_seed_makes_sequence_reproducible():
    a = PieceFactory(10, seed=42)
    b = PieceFactory(10, seed=42)
    assert [a.create().kind for _ in range(30)] == [b.create().kind for _ in range(30)]


def test_reseed_restarts_sequence():
    factory = PieceFactory(10, seed=7)
    first = [factory.create().kind for _ in range(10)]
    factory.reseed(7)
    assert [factory.create().kind for _ in range(10)] == first


def test_every_kind_is_drawn():
    factory = PieceFactory(10, seed=3)
    seen = {factory.create().kind for _ in range(500)}
    assert seen == set(TetrominoType)
