from __future__ import annotations

import pytest
from chia_rs import G1Element, PrivateKey
from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.condition_tools import conditions_for_solution
from chia_dog.util.errors import DecodeError, Err
from chia_dog.wallet.conditions import AggSigMe, CreateCoin
from chia_dog.wallet.puzzles import p2_conditions
from chia_dog.wallet.puzzles.p2_delegated_puzzle_or_hidden_puzzle import (
    DEFAULT_HIDDEN_PUZZLE_HASH,
    MOD,
    calculate_synthetic_secret_key,
    puzzle_for_pk,
    puzzle_hash_for_pk,
    solution_for_delegated_puzzle,
    solution_for_hidden_puzzle,
)
from chia_dog.wallet.standard_layer import StandardLayer, StandardSolution


def test_standard_layer_matches_puzzle_for_pk(public_key: G1Element, p2: StandardLayer) -> None:
    assert p2.construct_puzzle() == puzzle_for_pk(public_key)
    assert p2.tree_hash() == puzzle_hash_for_pk(public_key)
    assert p2.tree_hash() == p2.construct_puzzle().get_tree_hash()


def test_standard_layer_round_trip(p2: StandardLayer) -> None:
    assert StandardLayer.parse_puzzle(p2.construct_puzzle()) == p2

    solution = StandardSolution(Program.to(1), Program.to([[51, bytes32([3] * 32), 1]]))
    assert StandardLayer.parse_solution(p2.construct_solution(solution)) == solution


def test_standard_layer_hidden_solution_round_trip(public_key: G1Element, p2: StandardLayer) -> None:
    solution = StandardSolution(Program.to([8]), Program.to(None), public_key)
    assert StandardLayer.parse_solution(p2.construct_solution(solution)) == solution


def test_standard_layer_not_recognized() -> None:
    assert StandardLayer.parse_puzzle(Program.to(1)) is None
    assert StandardLayer.parse_puzzle(p2_conditions.MOD.curry(5)) is None


@pytest.mark.parametrize("argument", [b"too short", [1, 2]])
def test_standard_layer_bad_key(argument: object) -> None:
    with pytest.raises(DecodeError) as e:
        StandardLayer.parse_puzzle(MOD.curry(argument))
    assert e.value.code == Err.INVALID_CURRIED_ARGS


def test_standard_layer_bad_solution() -> None:
    with pytest.raises(DecodeError) as e:
        StandardLayer.parse_solution(Program.to([None, 1]))
    assert e.value.code == Err.INVALID_SOLUTION


def test_spend_with_conditions(p2: StandardLayer) -> None:
    create_coin = CreateCoin(bytes32([4] * 32), uint64(100), [b"memo"])
    spend = p2.spend_with_conditions([create_coin])
    assert spend.puzzle == p2.construct_puzzle()

    conditions = conditions_for_solution(spend.puzzle, spend.solution)
    delegated_puzzle = p2_conditions.puzzle_for_conditions([create_coin])
    # the owner signs off on the delegated puzzle first
    assert conditions == [AggSigMe(p2.synthetic_public_key, delegated_puzzle.get_tree_hash()), create_coin]


def test_synthetic_secret_key_signs_for_synthetic_public_key(secret_key: PrivateKey, p2: StandardLayer) -> None:
    synthetic_secret_key = calculate_synthetic_secret_key(secret_key, DEFAULT_HIDDEN_PUZZLE_HASH)
    assert synthetic_secret_key.get_g1() == p2.synthetic_public_key


def test_solution_helpers_match_standard_layer(public_key: G1Element, p2: StandardLayer) -> None:
    delegated_puzzle = Program.to(1)
    solution = Program.to([[51, bytes32([3] * 32), 1]])
    assert solution_for_delegated_puzzle(delegated_puzzle, solution) == p2.construct_solution(
        StandardSolution(delegated_puzzle, solution)
    )
    assert solution_for_hidden_puzzle(public_key, delegated_puzzle, solution) == p2.construct_solution(
        StandardSolution(delegated_puzzle, solution, public_key)
    )
