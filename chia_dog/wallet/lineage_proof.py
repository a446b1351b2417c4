from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.errors import DecodeError, Err


@dataclass(frozen=True)
class LineageProof:
    """
    Proof that a coin's parent was itself a DOG: the parent's parent id, the parent's
    inner puzzle hash and the parent's amount. Together with the asset id these are
    enough to recompute the parent's full puzzle hash.
    """

    parent_name: bytes32
    inner_puzzle_hash: bytes32
    amount: uint64

    def to_program(self) -> Program:
        return Program.to([self.parent_name, self.inner_puzzle_hash, self.amount])

    @classmethod
    def from_program(cls, program: Program) -> LineageProof:
        try:
            parent_name, inner_puzzle_hash, amount = program.as_list()
            return cls(
                bytes32(parent_name.as_atom()),
                bytes32(inner_puzzle_hash.as_atom()),
                uint64(amount.as_int()),
            )
        except ValueError as e:
            raise DecodeError(Err.INVALID_LINEAGE_PROOF, f"malformed lineage proof {program}: {e}") from e


def lineage_proof_to_program(lineage_proof: Optional[LineageProof]) -> Program:
    # eve coins have no parent to prove, the puzzle reads nil instead
    if lineage_proof is None:
        return Program.to(None)
    return lineage_proof.to_program()


def lineage_proof_from_program(program: Program) -> Optional[LineageProof]:
    if program.atom == b"":
        return None
    return LineageProof.from_program(program)
