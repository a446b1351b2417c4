from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from chia_rs import G1Element
from chia_rs.sized_bytes import bytes32

from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.errors import DecodeError, Err
from chia_dog.wallet.conditions import Condition
from chia_dog.wallet.puzzle_layer import Spend
from chia_dog.wallet.puzzles import p2_conditions
from chia_dog.wallet.puzzles.p2_delegated_puzzle_or_hidden_puzzle import (
    DEFAULT_HIDDEN_PUZZLE_HASH,
    MOD_HASH,
    calculate_synthetic_public_key,
    puzzle_for_synthetic_public_key,
    puzzle_hash_for_synthetic_public_key,
)
from chia_dog.wallet.uncurried_puzzle import uncurry_puzzle


def _public_key_from_program(program: Program) -> G1Element:
    blob = program.as_atom()
    if len(blob) != G1Element.SIZE:
        raise ValueError(f"public key is {len(blob)} bytes, not {G1Element.SIZE}")
    return G1Element.from_bytes(blob)


@dataclass(frozen=True)
class StandardSolution:
    delegated_puzzle: Program
    solution: Program
    # only set when spending through the hidden puzzle
    original_public_key: Optional[G1Element] = None


@dataclass(frozen=True)
class StandardLayer:
    """
    The ownership layer of a standard coin, `p2_delegated_puzzle_or_hidden_puzzle` curried with a synthetic key.
    """

    synthetic_public_key: G1Element

    @classmethod
    def from_public_key(
        cls, public_key: G1Element, hidden_puzzle_hash: bytes32 = DEFAULT_HIDDEN_PUZZLE_HASH
    ) -> StandardLayer:
        return cls(calculate_synthetic_public_key(public_key, hidden_puzzle_hash))

    @classmethod
    def parse_puzzle(cls, puzzle: Program) -> Optional[StandardLayer]:
        uncurried = uncurry_puzzle(puzzle)
        if uncurried.mod_hash != MOD_HASH:
            return None
        try:
            (synthetic_public_key,) = uncurried.curried_args()
            return cls(_public_key_from_program(synthetic_public_key))
        except ValueError as e:
            raise DecodeError(Err.INVALID_CURRIED_ARGS, f"bad standard puzzle arguments: {e}") from e

    @classmethod
    def parse_solution(cls, solution: Program) -> StandardSolution:
        try:
            original_public_key, delegated_puzzle, delegated_solution = solution.as_list()
            return StandardSolution(
                delegated_puzzle,
                delegated_solution,
                (
                    None
                    if original_public_key.atom == b""
                    else _public_key_from_program(original_public_key)
                ),
            )
        except ValueError as e:
            raise DecodeError(Err.INVALID_SOLUTION, f"bad standard solution {solution}: {e}") from e

    def construct_puzzle(self) -> Program:
        return puzzle_for_synthetic_public_key(self.synthetic_public_key)

    def construct_solution(self, solution: StandardSolution) -> Program:
        original_public_key = None if solution.original_public_key is None else bytes(solution.original_public_key)
        return Program.to([original_public_key, solution.delegated_puzzle, solution.solution])

    def tree_hash(self) -> bytes32:
        return puzzle_hash_for_synthetic_public_key(self.synthetic_public_key)

    def spend_with_conditions(self, conditions: Iterable[Condition]) -> Spend:
        """
        A spend that outputs exactly `conditions` (plus the AGG_SIG_ME the puzzle adds for the owner).
        """
        return Spend(
            self.construct_puzzle(),
            self.construct_solution(StandardSolution(p2_conditions.puzzle_for_conditions(conditions), Program.to(0))),
        )
