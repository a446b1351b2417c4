from __future__ import annotations

from typing import Union

from chia_rs import Coin
from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.errors import DecodeError, Err

__all__ = ["Coin", "coin_as_list", "coin_from_program"]


def coin_as_list(c: Coin) -> list[Union[bytes32, uint64]]:
    return [c.parent_coin_info, c.puzzle_hash, uint64(c.amount)]


def coin_from_program(program: Program) -> Coin:
    try:
        parent_coin_info, puzzle_hash, amount = program.as_list()
        return Coin(bytes32(parent_coin_info.as_atom()), bytes32(puzzle_hash.as_atom()), uint64(amount.as_int()))
    except ValueError as e:
        raise DecodeError(Err.INVALID_SOLUTION, f"malformed coin info {program}: {e}") from e
