import pytest

from philosim.sequential import Sequential


def make():
    return Sequential(["a", "b", "c"])


def test_init_keeps_order_and_starts_at_begin():
    seq = make()
    assert list(seq) == ["a", "b", "c"]
    assert len(seq) == 3
    assert seq.current() == "a"
    assert not seq.is_end()


def test_empty_sequence():
    seq = Sequential([])
    assert len(seq) == 0
    assert list(seq) == []
    assert seq.current() is None
    assert seq.next() is None
    assert seq.is_end()


def test_next_walks_to_end_then_none():
    seq = make()
    assert seq.next() == "b"
    assert seq.next() == "c"
    assert seq.is_end()
    assert seq.next() is None
    assert seq.current() is None
    assert seq.next() is None


def test_move_current_to_begin_rewinds():
    seq = make()
    seq.next()
    seq.next()
    seq.move_current_to_begin()
    assert seq.current() == "a"


def test_move_end_from_middle():
    seq = make()
    seq.next()
    seq.move_end()
    assert list(seq) == ["a", "c", "b"]
    assert seq.current() == "a"
    seq.next()
    assert seq.next() == "b"
    assert seq.is_end()


def test_move_end_from_begin():
    seq = make()
    seq.move_end()
    assert list(seq) == ["b", "c", "a"]
    assert seq.current() == "b"


def test_move_end_of_last_keeps_order():
    seq = make()
    seq.next()
    seq.next()
    seq.move_end()
    assert list(seq) == ["a", "b", "c"]
    assert seq.current() == "a"


def test_move_end_single_item():
    seq = Sequential(["x"])
    seq.move_end()
    assert list(seq) == ["x"]
    assert seq.current() == "x"
    assert seq.is_end()


def test_erase_middle_moves_to_following():
    seq = make()
    seq.next()
    seq.erase()
    assert list(seq) == ["a", "c"]
    assert seq.current() == "c"
    assert seq.is_end()


def test_erase_end_leaves_cursor_past_end():
    seq = make()
    seq.next()
    seq.next()
    seq.erase()
    assert list(seq) == ["a", "b"]
    assert seq.current() is None
    seq.move_current_to_begin()
    seq.next()
    assert seq.is_end()
    assert seq.current() == "b"


def test_erase_begin():
    seq = make()
    seq.erase()
    assert list(seq) == ["b", "c"]
    assert seq.current() == "b"


def test_erase_only_item():
    seq = Sequential(["x"])
    seq.erase()
    assert len(seq) == 0
    assert seq.current() is None
    seq.move_current_to_begin()
    assert seq.current() is None


def test_erase_all_in_turn():
    seq = make()
    removed = []
    while seq.current() is not None:
        removed.append(seq.current())
        seq.erase()
    assert removed == ["a", "b", "c"]
    assert list(seq) == []


def test_move_end_without_current_raises():
    seq = make()
    for _ in range(3):
        seq.next()
    with pytest.raises(IndexError):
        seq.move_end()


def test_erase_without_current_raises():
    seq = Sequential([])
    with pytest.raises(IndexError):
        seq.erase()


def test_rotation_preserves_members():
    seq = Sequential(range(5))
    for _ in range(7):
        seq.next()
        if seq.current() is None:
            seq.move_current_to_begin()
        seq.move_end()
    assert sorted(seq) == [0, 1, 2, 3, 4]
    assert len(seq) == 5