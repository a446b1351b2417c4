"""
The launcher profile of the DOG puzzle.

Instead of currying the amount into the DOG layer, every generation is a pair of coins: a
launcher coin whose puzzle commits to the asset, the amount and the owner, and the ephemeral
DOG coin it creates. The DOG coin only curries a hash of the launcher (curried with the asset id)
next to its own mod hash, so the amount is free to change from one generation to the next.

Only hashes and solution encodings live here. The single coin profile in `dog_utils` is the
one used to build spends.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.casts import fits_int64
from chia_dog.util.errors import ArithmeticOverflow, DecodeError, Err
from chia_dog.wallet.dog_wallet.dog_layer import CoinProof
from chia_dog.wallet.dog_wallet.dog_puzzles import (
    DOG_LAUNCHER_MOD,
    DOG_LAUNCHER_MOD_HASH,
    DOG_MOD,
    DOG_MOD_HASH,
    DOG_MOD_HASH_TREEHASH,
)
from chia_dog.wallet.lineage_proof import LineageProof, lineage_proof_from_program, lineage_proof_to_program
from chia_dog.wallet.util.curry_and_treehash import curry_tree_hash, shatree_atom, shatree_int

_T_InnerSolution = TypeVar("_T_InnerSolution")


def _check_int64(name: str, value: int) -> None:
    if not fits_int64(value):
        raise ArithmeticOverflow(Err.INT64_OVERFLOW, f"{name} {value} does not fit in 64 bits")


def construct_launcher_self(asset_id: bytes32) -> Program:
    return DOG_LAUNCHER_MOD.curry(asset_id)


def launcher_self_hash(asset_id: bytes32) -> bytes32:
    return curry_tree_hash(DOG_LAUNCHER_MOD_HASH, shatree_atom(asset_id))


def construct_dog_launcher_puzzle(asset_id: bytes32, amount: int, inner_puzzle_hash: bytes32) -> Program:
    launcher_self = construct_launcher_self(asset_id)
    return launcher_self.curry(launcher_self.get_tree_hash(), DOG_MOD_HASH, amount, inner_puzzle_hash)


def dog_launcher_puzzle_hash(asset_id: bytes32, amount: int, inner_puzzle_hash: bytes32) -> bytes32:
    # the launcher curried with the asset id is itself the mod that the rest is curried onto
    self_hash = launcher_self_hash(asset_id)
    return curry_tree_hash(
        self_hash,
        shatree_atom(self_hash),
        DOG_MOD_HASH_TREEHASH,
        shatree_int(amount),
        shatree_atom(inner_puzzle_hash),
    )


def match_dog_launcher_puzzle(puzzle: Program) -> Optional[tuple[bytes32, int, bytes32]]:
    """
    Returns `(asset_id, amount, inner_puzzle_hash)` if `puzzle` is a DOG launcher, None otherwise.
    """
    launcher_self, args = puzzle.uncurry()
    if launcher_self is puzzle:
        return None
    mod, self_args = launcher_self.uncurry()
    if mod is launcher_self or mod.get_tree_hash() != DOG_LAUNCHER_MOD_HASH:
        return None
    try:
        (asset_id,) = self_args.as_list()
        self_hash, dog_mod_hash, amount, inner_puzzle_hash = args.as_list()
        parsed_asset_id = bytes32(asset_id.as_atom())
        parsed = (parsed_asset_id, amount.as_int(), bytes32(inner_puzzle_hash.as_atom()))
        claimed_hashes = (bytes32(self_hash.as_atom()), bytes32(dog_mod_hash.as_atom()))
    except ValueError as e:
        raise DecodeError(Err.INVALID_CURRIED_ARGS, f"bad DOG launcher arguments: {e}") from e
    if claimed_hashes != (launcher_self_hash(parsed_asset_id), DOG_MOD_HASH):
        raise DecodeError(Err.INVALID_CURRIED_ARGS, "DOG launcher commits to the wrong mod hashes")
    return parsed


def construct_launcher_profile_puzzle(asset_id: bytes32, inner_puzzle: Program) -> Program:
    return DOG_MOD.curry(DOG_MOD_HASH, launcher_self_hash(asset_id), inner_puzzle)


def launcher_profile_puzzle_hash(asset_id: bytes32, inner_puzzle_hash: bytes32) -> bytes32:
    return curry_tree_hash(
        DOG_MOD_HASH,
        DOG_MOD_HASH_TREEHASH,
        shatree_atom(launcher_self_hash(asset_id)),
        inner_puzzle_hash,
    )


@dataclass(frozen=True)
class LauncherProof:
    parent_inner_puzzle_hash: bytes32
    parent_amount: uint64

    def to_program(self) -> Program:
        return Program.to((self.parent_inner_puzzle_hash, self.parent_amount))

    @classmethod
    def from_program(cls, program: Program) -> LauncherProof:
        if program.pair is None:
            raise DecodeError(Err.INVALID_LINEAGE_PROOF, f"launcher proof is not a pair: {program}")
        try:
            return cls(bytes32(program.first().as_atom()), uint64(program.rest().as_int()))
        except ValueError as e:
            raise DecodeError(Err.INVALID_LINEAGE_PROOF, f"malformed launcher proof {program}: {e}") from e


@dataclass(frozen=True)
class TailPack:
    """
    Reveals the TAIL to a launcher, together with the supply change it authorizes.
    """

    delta: int
    tail_reveal: Program
    tail_solution: Program

    def __post_init__(self) -> None:
        _check_int64("TAIL delta", self.delta)

    def to_program(self) -> Program:
        return Program.to((self.delta, (self.tail_reveal, self.tail_solution)))

    @classmethod
    def from_program(cls, program: Program) -> TailPack:
        try:
            delta = program.at("f").as_int()
            tail_reveal = program.at("rf")
            tail_solution = program.at("rr")
        except (ValueError, Program.EvalError) as e:
            raise DecodeError(Err.INVALID_SOLUTION, f"malformed TAIL pack {program}: {e}") from e
        if not fits_int64(delta):
            raise DecodeError(Err.INVALID_SOLUTION, f"TAIL delta {delta} is not a signed 64 bit value")
        return cls(delta, tail_reveal, tail_solution)


@dataclass(frozen=True)
class DogLauncherSolution:
    tail_pack: Optional[TailPack]
    lineage_proof: Optional[LineageProof]
    my_id: bytes32

    def to_program(self) -> Program:
        return Program.to(
            [
                None if self.tail_pack is None else self.tail_pack.to_program(),
                lineage_proof_to_program(self.lineage_proof),
                self.my_id,
            ]
        )

    @classmethod
    def from_program(cls, program: Program) -> DogLauncherSolution:
        try:
            tail_pack, lineage_proof, my_id = program.as_list()
            parsed_my_id = bytes32(my_id.as_atom())
        except ValueError as e:
            raise DecodeError(Err.INVALID_SOLUTION, f"malformed DOG launcher solution {program}: {e}") from e
        return cls(
            None if tail_pack.atom == b"" else TailPack.from_program(tail_pack),
            lineage_proof_from_program(lineage_proof),
            parsed_my_id,
        )


@dataclass(frozen=True)
class LauncherProfileSolution(Generic[_T_InnerSolution]):
    """
    The solution of a DOG coin in the launcher profile. Neighbours exchange deltas instead of a subtotal.
    """

    launcher_proof: LauncherProof
    inner_solution: _T_InnerSolution
    next_coin_delta: int
    prev_coin_delta: int
    prev_coin_id: bytes32
    next_coin_proof: CoinProof
    my_amount: uint64

    def __post_init__(self) -> None:
        _check_int64("next_coin_delta", self.next_coin_delta)
        _check_int64("prev_coin_delta", self.prev_coin_delta)

    def to_program(self, inner_solution: Program) -> Program:
        return Program.to(
            [
                self.launcher_proof.to_program(),
                inner_solution,
                self.next_coin_delta,
                self.prev_coin_delta,
                self.prev_coin_id,
                self.next_coin_proof.to_program(),
                self.my_amount,
            ]
        )

    @classmethod
    def from_program(cls, program: Program) -> LauncherProfileSolution[Program]:
        try:
            (
                launcher_proof,
                inner_solution,
                next_coin_delta,
                prev_coin_delta,
                prev_coin_id,
                next_coin_proof,
                my_amount,
            ) = program.as_list()
            deltas = (next_coin_delta.as_int(), prev_coin_delta.as_int())
            parsed_prev_coin_id = bytes32(prev_coin_id.as_atom())
            parsed_my_amount = uint64(my_amount.as_int())
        except ValueError as e:
            raise DecodeError(Err.INVALID_SOLUTION, f"malformed DOG solution {program}: {e}") from e
        if not all(fits_int64(delta) for delta in deltas):
            raise DecodeError(Err.INVALID_SOLUTION, "DOG solution deltas are not signed 64 bit values")
        return cls(
            LauncherProof.from_program(launcher_proof),
            inner_solution,
            deltas[0],
            deltas[1],
            parsed_prev_coin_id,
            CoinProof.from_program(next_coin_proof),
            parsed_my_amount,
        )
