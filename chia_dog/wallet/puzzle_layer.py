from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

from chia_rs.sized_bytes import bytes32
from typing_extensions import Protocol

from chia_dog.types.blockchain_format.program import Program

"""
A puzzle layer wraps one curried program and knows how to take it apart and put it back together.

Layers nest: an outer layer (like the DOG layer) curries an inner puzzle which is itself a layer.
A layer must include the following:
  - construct_puzzle(self) -> Program
    - Build the full puzzle, including every layer inside of it
  - construct_solution(self, solution) -> Program
    - Build the solution for this layer out of the layer specific solution type
  - tree_hash(self) -> bytes32
    - The puzzle hash of `construct_puzzle()` without building the program

Parsing goes the other way and is done by a `LayerParser`, which every layer class is (via classmethods):
  - parse_puzzle(puzzle: Program) -> Optional[Layer]
    - None if the program is not this layer, an exception if it pretends to be this layer but is malformed
  - parse_solution(solution: Program) -> Solution
"""

_T_Layer = TypeVar("_T_Layer", covariant=True)
_T_Solution = TypeVar("_T_Solution")


class PuzzleLayer(Protocol[_T_Solution]):
    def construct_puzzle(self) -> Program: ...

    def construct_solution(self, solution: _T_Solution) -> Program: ...

    def tree_hash(self) -> bytes32: ...


class LayerParser(Protocol[_T_Layer]):
    def parse_puzzle(self, puzzle: Program) -> Optional[_T_Layer]: ...

    def parse_solution(self, solution: Program) -> object: ...


@dataclass(frozen=True)
class RawLayer:
    """
    An inner puzzle with no known structure. It is always recognized and its solution is opaque.
    """

    puzzle: Program

    @classmethod
    def parse_puzzle(cls, puzzle: Program) -> Optional[RawLayer]:
        return cls(puzzle)

    @classmethod
    def parse_solution(cls, solution: Program) -> Program:
        return solution

    def construct_puzzle(self) -> Program:
        return self.puzzle

    def construct_solution(self, solution: Program) -> Program:
        return solution

    def tree_hash(self) -> bytes32:
        return self.puzzle.get_tree_hash()


@dataclass(frozen=True)
class Spend:
    puzzle: Program
    solution: Program
