from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.coin import Coin, coin_as_list, coin_from_program
from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.casts import fits_int64, fits_uint128
from chia_dog.util.errors import ArithmeticOverflow, DecodeError, Err, InvalidModHash
from chia_dog.wallet.dog_wallet.dog_puzzles import (
    DOG_MOD_HASH,
    construct_dog_puzzle,
    dog_puzzle_hash_for_inner_puzzle_hash,
    match_dog_puzzle,
)
from chia_dog.wallet.lineage_proof import LineageProof, lineage_proof_from_program, lineage_proof_to_program
from chia_dog.wallet.puzzle_layer import LayerParser, PuzzleLayer, RawLayer
from chia_dog.wallet.uncurried_puzzle import uncurry_puzzle

_T_Inner = TypeVar("_T_Inner", bound=PuzzleLayer[Any])
_T_InnerSolution = TypeVar("_T_InnerSolution")


@dataclass(frozen=True)
class CoinProof:
    """
    What a ring member is told about the next coin: enough to recompute its full puzzle hash and id.
    """

    parent_coin_info: bytes32
    inner_puzzle_hash: bytes32
    amount: uint64

    def to_program(self) -> Program:
        return Program.to([self.parent_coin_info, self.inner_puzzle_hash, self.amount])

    @classmethod
    def from_program(cls, program: Program) -> CoinProof:
        try:
            parent_coin_info, inner_puzzle_hash, amount = program.as_list()
            return cls(
                bytes32(parent_coin_info.as_atom()),
                bytes32(inner_puzzle_hash.as_atom()),
                uint64(amount.as_int()),
            )
        except ValueError as e:
            raise DecodeError(Err.INVALID_SOLUTION, f"malformed coin proof {program}: {e}") from e


@dataclass(frozen=True)
class DogSolution(Generic[_T_InnerSolution]):
    inner_solution: _T_InnerSolution
    lineage_proof: Optional[LineageProof]
    prev_coin_id: bytes32
    this_coin_info: Coin
    next_coin_proof: CoinProof
    prev_subtotal: int
    extra_delta: int

    def __post_init__(self) -> None:
        # both go on the wire as signed 64 bit values
        if not fits_int64(self.prev_subtotal):
            raise ArithmeticOverflow(Err.INT64_OVERFLOW, f"prev_subtotal {self.prev_subtotal} does not fit in 64 bits")
        if not fits_int64(self.extra_delta):
            raise ArithmeticOverflow(Err.INT64_OVERFLOW, f"extra_delta {self.extra_delta} does not fit in 64 bits")


@dataclass(frozen=True)
class DogLayer(Generic[_T_Inner]):
    """
    The supply restricting outer layer. Unless the TAIL program is run, the coins spent together
    in one ring can only pass their value on, never create or destroy it.

    The puzzle is `DOG_MOD` curried with its own hash, the amount, the asset id (tree hash of
    the TAIL) and the inner puzzle.
    """

    amount: int
    asset_id: bytes32
    inner_puzzle: _T_Inner

    def __post_init__(self) -> None:
        if not fits_uint128(self.amount):
            raise ArithmeticOverflow(
                Err.AMOUNT_OUT_OF_RANGE, f"DOG amount {self.amount} is not an unsigned 128 bit value"
            )

    @classmethod
    def parse_puzzle(cls, puzzle: Program, inner: LayerParser[Any] = RawLayer) -> Optional[DogLayer[Any]]:
        uncurried = uncurry_puzzle(puzzle)
        if uncurried.mod is puzzle:
            # not curried at all
            return None
        args = match_dog_puzzle(uncurried)
        if args is None:
            return None

        curried_args = list(args)
        if len(curried_args) != 4:
            raise DecodeError(Err.INVALID_CURRIED_ARGS, f"DOG puzzle curries {len(curried_args)} arguments, not 4")
        mod_hash_program, amount_program, asset_id_program, inner_puzzle = curried_args
        try:
            mod_hash = bytes32(mod_hash_program.as_atom())
            amount = amount_program.as_int()
            asset_id = bytes32(asset_id_program.as_atom())
        except ValueError as e:
            raise DecodeError(Err.INVALID_CURRIED_ARGS, f"bad DOG puzzle arguments: {e}") from e
        if not fits_uint128(amount):
            raise DecodeError(Err.INVALID_CURRIED_ARGS, f"DOG amount {amount} is not an unsigned 128 bit value")

        if mod_hash != DOG_MOD_HASH:
            raise InvalidModHash(f"DOG puzzle claims mod hash {mod_hash.hex()}")

        inner_layer = inner.parse_puzzle(inner_puzzle)
        if inner_layer is None:
            return None

        return cls(amount, asset_id, inner_layer)

    @classmethod
    def parse_solution(cls, solution: Program, inner: LayerParser[Any] = RawLayer) -> DogSolution[Any]:
        try:
            items = solution.as_list()
        except ValueError as e:
            raise DecodeError(Err.INVALID_SOLUTION, f"DOG solution is not a list: {solution}") from e
        if len(items) != 7:
            raise DecodeError(Err.INVALID_SOLUTION, f"DOG solution has {len(items)} items, not 7")

        (
            inner_solution,
            lineage_proof,
            prev_coin_id,
            this_coin_info,
            next_coin_proof,
            prev_subtotal,
            extra_delta,
        ) = items
        try:
            parsed_prev_coin_id = bytes32(prev_coin_id.as_atom())
            parsed_prev_subtotal = prev_subtotal.as_int()
            parsed_extra_delta = extra_delta.as_int()
        except ValueError as e:
            raise DecodeError(Err.INVALID_SOLUTION, f"bad DOG solution: {e}") from e
        if not fits_int64(parsed_prev_subtotal) or not fits_int64(parsed_extra_delta):
            raise DecodeError(Err.INVALID_SOLUTION, "DOG solution subtotal or delta is not a signed 64 bit value")

        return DogSolution(
            inner.parse_solution(inner_solution),
            lineage_proof_from_program(lineage_proof),
            parsed_prev_coin_id,
            coin_from_program(this_coin_info),
            CoinProof.from_program(next_coin_proof),
            parsed_prev_subtotal,
            parsed_extra_delta,
        )

    @classmethod
    def parser(cls, inner: LayerParser[Any] = RawLayer) -> DogLayerParser:
        """
        A parser for DOG layers with a known inner layer, usable wherever a `LayerParser` is expected.
        """
        return DogLayerParser(inner)

    def construct_puzzle(self) -> Program:
        return construct_dog_puzzle(self.amount, self.asset_id, self.inner_puzzle.construct_puzzle())

    def construct_solution(self, solution: DogSolution[Any]) -> Program:
        return Program.to(
            [
                self.inner_puzzle.construct_solution(solution.inner_solution),
                lineage_proof_to_program(solution.lineage_proof),
                solution.prev_coin_id,
                coin_as_list(solution.this_coin_info),
                solution.next_coin_proof.to_program(),
                solution.prev_subtotal,
                solution.extra_delta,
            ]
        )

    def tree_hash(self) -> bytes32:
        return dog_puzzle_hash_for_inner_puzzle_hash(self.amount, self.asset_id, self.inner_puzzle.tree_hash())


@dataclass(frozen=True)
class DogLayerParser:
    inner: LayerParser[Any] = RawLayer

    def parse_puzzle(self, puzzle: Program) -> Optional[DogLayer[Any]]:
        return DogLayer.parse_puzzle(puzzle, self.inner)

    def parse_solution(self, solution: Program) -> DogSolution[Any]:
        return DogLayer.parse_solution(solution, self.inner)
