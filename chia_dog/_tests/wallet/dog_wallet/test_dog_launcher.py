from __future__ import annotations

import pytest
from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.errors import ArithmeticOverflow, DecodeError, Err
from chia_dog.wallet.dog_wallet.dog_launcher import (
    DogLauncherSolution,
    LauncherProfileSolution,
    LauncherProof,
    TailPack,
    construct_dog_launcher_puzzle,
    construct_launcher_profile_puzzle,
    construct_launcher_self,
    dog_launcher_puzzle_hash,
    launcher_profile_puzzle_hash,
    launcher_self_hash,
    match_dog_launcher_puzzle,
)
from chia_dog.wallet.dog_wallet.dog_layer import CoinProof
from chia_dog.wallet.dog_wallet.dog_puzzles import DOG_MOD_HASH, dog_puzzle_hash_for_inner_puzzle_hash
from chia_dog.wallet.lineage_proof import LineageProof

INNER_PUZZLE_HASH = bytes32([4] * 32)
TAIL = Program.to([1, 2, 3])


def test_launcher_self_hash(asset_id: bytes32) -> None:
    assert launcher_self_hash(asset_id) == construct_launcher_self(asset_id).get_tree_hash()
    assert launcher_self_hash(asset_id) != launcher_self_hash(bytes32([2] * 32))


@pytest.mark.parametrize("amount", [0, 1, 10000, 2**64 - 1])
def test_dog_launcher_puzzle_hash(asset_id: bytes32, amount: int) -> None:
    puzzle = construct_dog_launcher_puzzle(asset_id, amount, INNER_PUZZLE_HASH)
    assert dog_launcher_puzzle_hash(asset_id, amount, INNER_PUZZLE_HASH) == puzzle.get_tree_hash()
    assert match_dog_launcher_puzzle(puzzle) == (asset_id, amount, INNER_PUZZLE_HASH)


@pytest.mark.parametrize("puzzle", [Program.to(1), Program.to([1, 2]).curry(1, 2, 3, 4)])
def test_not_a_dog_launcher(puzzle: Program) -> None:
    assert match_dog_launcher_puzzle(puzzle) is None


def test_launcher_self_is_not_a_launcher(asset_id: bytes32) -> None:
    assert match_dog_launcher_puzzle(construct_launcher_self(asset_id)) is None


def test_dog_launcher_wrong_self_hash(asset_id: bytes32) -> None:
    puzzle = construct_launcher_self(asset_id).curry(bytes32([0] * 32), DOG_MOD_HASH, 1, INNER_PUZZLE_HASH)
    with pytest.raises(DecodeError) as e:
        match_dog_launcher_puzzle(puzzle)
    assert e.value.code == Err.INVALID_CURRIED_ARGS


def test_launcher_profile_puzzle_hash(asset_id: bytes32) -> None:
    inner_puzzle = Program.to([1, b"owner"])
    puzzle = construct_launcher_profile_puzzle(asset_id, inner_puzzle)
    assert launcher_profile_puzzle_hash(asset_id, inner_puzzle.get_tree_hash()) == puzzle.get_tree_hash()
    # the two profiles never share puzzle hashes
    assert puzzle.get_tree_hash() != dog_puzzle_hash_for_inner_puzzle_hash(0, asset_id, inner_puzzle.get_tree_hash())


def test_launcher_proof() -> None:
    proof = LauncherProof(INNER_PUZZLE_HASH, uint64(500))
    assert proof.to_program() == Program.to((INNER_PUZZLE_HASH, 500))
    assert LauncherProof.from_program(proof.to_program()) == proof


@pytest.mark.parametrize("program", [Program.to(5), Program.to((INNER_PUZZLE_HASH, -1)), Program.to((b"short", 1))])
def test_malformed_launcher_proof(program: Program) -> None:
    with pytest.raises(DecodeError) as e:
        LauncherProof.from_program(program)
    assert e.value.code == Err.INVALID_LINEAGE_PROOF


@pytest.mark.parametrize("tail_solution", [Program.to(None), Program.to([5, 6])])
def test_tail_pack(tail_solution: Program) -> None:
    pack = TailPack(-3000, TAIL, tail_solution)
    assert pack.to_program() == Program.to((-3000, (TAIL, tail_solution)))
    assert TailPack.from_program(pack.to_program()) == pack


@pytest.mark.parametrize(
    "program", [Program.to(5), Program.to([5]), Program.to([[1], TAIL]), Program.to([2**63, TAIL])]
)
def test_malformed_tail_pack(program: Program) -> None:
    with pytest.raises(DecodeError) as e:
        TailPack.from_program(program)
    assert e.value.code == Err.INVALID_SOLUTION


def test_tail_pack_delta_range() -> None:
    with pytest.raises(ArithmeticOverflow):
        TailPack(2**63, TAIL, Program.to(None))


@pytest.mark.parametrize(
    "solution",
    [
        DogLauncherSolution(None, None, bytes32([1] * 32)),
        DogLauncherSolution(
            TailPack(100, TAIL, Program.to(None)),
            LineageProof(bytes32([2] * 32), bytes32([3] * 32), uint64(7)),
            bytes32([1] * 32),
        ),
    ],
)
def test_dog_launcher_solution(solution: DogLauncherSolution) -> None:
    program = solution.to_program()
    assert len(program.as_list()) == 3
    assert DogLauncherSolution.from_program(program) == solution


def test_malformed_dog_launcher_solution() -> None:
    with pytest.raises(DecodeError) as e:
        DogLauncherSolution.from_program(Program.to([None, None]))
    assert e.value.code == Err.INVALID_SOLUTION


def launcher_profile_solution(next_coin_delta: int = 5, prev_coin_delta: int = -5) -> LauncherProfileSolution[Program]:
    return LauncherProfileSolution(
        launcher_proof=LauncherProof(INNER_PUZZLE_HASH, uint64(10)),
        inner_solution=Program.to([1, 2]),
        next_coin_delta=next_coin_delta,
        prev_coin_delta=prev_coin_delta,
        prev_coin_id=bytes32([5] * 32),
        next_coin_proof=CoinProof(bytes32([6] * 32), bytes32([7] * 32), uint64(8)),
        my_amount=uint64(10),
    )


def test_launcher_profile_solution() -> None:
    solution = launcher_profile_solution()
    program = solution.to_program(solution.inner_solution)
    assert program.at("rf") == Program.to([1, 2])
    assert LauncherProfileSolution.from_program(program) == solution


@pytest.mark.parametrize("next_coin_delta, prev_coin_delta", [(2**63, 0), (0, -(2**63) - 1)])
def test_launcher_profile_solution_delta_range(next_coin_delta: int, prev_coin_delta: int) -> None:
    with pytest.raises(ArithmeticOverflow) as e:
        launcher_profile_solution(next_coin_delta, prev_coin_delta)
    assert e.value.code == Err.INT64_OVERFLOW


def test_malformed_launcher_profile_solution() -> None:
    program = launcher_profile_solution().to_program(Program.to(None))
    with pytest.raises(DecodeError):
        LauncherProfileSolution.from_program(program.rest())
    with pytest.raises(DecodeError):
        LauncherProfileSolution.from_program(Program.to([*program.as_list()[:6], -1]))
