from __future__ import annotations

import pytest
from chia_rs.sized_bytes import bytes32

from chia_dog.types.blockchain_format.program import Program
from chia_dog.wallet.puzzles import p2_delegated_puzzle_or_hidden_puzzle
from chia_dog.wallet.util.curry_and_treehash import (
    calculate_hash_of_quoted_mod_hash,
    curry_and_treehash,
    curry_tree_hash,
    shatree_atom,
    shatree_atom_list,
    shatree_int,
    shatree_pair,
)


def test_curry_and_treehash() -> None:
    arbitrary_mod = p2_delegated_puzzle_or_hidden_puzzle.MOD
    arbitrary_mod_hash = arbitrary_mod.get_tree_hash()

    # we don't really care what `arbitrary_mod` is. We just need some code

    quoted_mod_hash = calculate_hash_of_quoted_mod_hash(arbitrary_mod_hash)

    for v in range(100):
        args = [v, v * v, v * v * v]
        puzzle = arbitrary_mod.curry(*args)
        puzzle_hash_via_curry = puzzle.get_tree_hash()
        hashed_args = [Program.to(_).get_tree_hash() for _ in args]
        assert puzzle_hash_via_curry == curry_and_treehash(quoted_mod_hash, *hashed_args)
        assert puzzle_hash_via_curry == curry_tree_hash(arbitrary_mod_hash, *hashed_args)


def test_curry_tree_hash_no_arguments() -> None:
    mod = Program.to([1, 2, 3])
    assert curry_tree_hash(mod.get_tree_hash()) == mod.curry().get_tree_hash()


def test_curry_tree_hash_of_curried_mod() -> None:
    # currying onto an already curried program hashes the inner curry as the mod
    inner = p2_delegated_puzzle_or_hidden_puzzle.MOD.curry(b"\x01" * 48)
    outer = inner.curry(7, bytes32([2] * 32))
    expected = curry_tree_hash(inner.get_tree_hash(), shatree_int(7), shatree_atom(bytes([2] * 32)))
    assert outer.get_tree_hash() == expected


def test_shatree_pair() -> None:
    left = Program.to(b"left")
    right = Program.to([1, 2])
    assert shatree_pair(left.get_tree_hash(), right.get_tree_hash()) == left.cons(right).get_tree_hash()


@pytest.mark.parametrize(
    "value", [[], [bytes32([3] * 32)], [bytes32([0] * 32), bytes32([1] * 32)], [bytes([1]), bytes([1, 2, 3])]]
)
def test_shatree_atom_list(value: list[bytes]) -> None:
    h1 = shatree_atom_list(value)
    h2 = Program.to(value).get_tree_hash()
    assert h1 == h2


@pytest.mark.parametrize("value", [0, -1, 1, 0x7F, 0x80, 100000000, -10000000, -113, 2**64 - 1, 2**127 - 1])
def test_shatree_int(value: int) -> None:
    h1 = shatree_int(value)
    h2 = Program.to(value).get_tree_hash()
    assert h1 == h2


@pytest.mark.parametrize("value", [bytes([1] * 1), bytes([]), bytes([5] * 1000)])
def test_shatree_atom(value: bytes) -> None:
    h1 = shatree_atom(value)
    h2 = Program.to(value).get_tree_hash()
    assert h1 == h2
