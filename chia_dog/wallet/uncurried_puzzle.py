from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from chia_rs.sized_bytes import bytes32

from chia_dog.types.blockchain_format.program import Program


@dataclass(frozen=True)
class UncurriedPuzzle:
    mod: Program
    args: Program

    @cached_property
    def mod_hash(self) -> bytes32:
        return self.mod.get_tree_hash()

    def curried_args(self) -> list[Program]:
        return self.args.as_list()


def uncurry_puzzle(puzzle: Program) -> UncurriedPuzzle:
    return UncurriedPuzzle(*puzzle.uncurry())
