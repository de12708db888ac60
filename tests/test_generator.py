from __future__ import annotations

from tetris_ai.game import PieceGenerator, TetrominoType


def test_each_bag_holds_every_type_once():
    gen = PieceGenerator(seed=1234)
    draws = [gen.next() for _ in range(7 * 20)]
    for start in range(0, len(draws), 7):
        assert sorted(draws[start:start + 7]) == sorted(TetrominoType)


def test_same_seed_same_sequence():
    a, b = PieceGenerator(seed=42), PieceGenerator(seed=42)
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


def test_different_seeds_usually_differ():
    a, b = PieceGenerator(seed=1), PieceGenerator(seed=2)
    assert [a.next() for _ in range(21)] != [b.next() for _ in range(21)]


def test_peek_does_not_consume_or_change_sequence():
    peeked, plain = PieceGenerator(seed=7), PieceGenerator(seed=7)
    out = []
    for _ in range(15):
        upcoming = peeked.peek()
        assert peeked.peek() == upcoming
        out.append(peeked.next())
        assert out[-1] == upcoming
    assert out == [plain.next() for _ in range(15)]
