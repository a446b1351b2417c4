from __future__ import annotations

import logging

from chia_dog.types.blockchain_format.program import INFINITE_COST, Program
from chia_dog.util.errors import ExecutionError
from chia_dog.wallet.conditions import Condition, CreateCoin, conditions_from_output, created_coins

log = logging.getLogger(__name__)


def run_puzzle(puzzle: Program, solution: Program, max_cost: int = INFINITE_COST) -> Program:
    try:
        _cost, output = puzzle.run_with_cost(max_cost, solution)
    except Exception as e:
        log.debug(f"Failed to run puzzle {puzzle.get_tree_hash().hex()}: {e}")
        raise ExecutionError(f"{type(e).__name__}: {e}") from e
    return output


def conditions_for_solution(
    puzzle_reveal: Program, solution: Program, max_cost: int = INFINITE_COST
) -> list[Condition]:
    # get the standard script for a puzzle hash and feed in the solution
    return conditions_from_output(run_puzzle(puzzle_reveal, solution, max_cost))


def created_coins_for_solution(
    puzzle_reveal: Program, solution: Program, max_cost: int = INFINITE_COST
) -> list[CreateCoin]:
    return created_coins(conditions_for_solution(puzzle_reveal, solution, max_cost))
