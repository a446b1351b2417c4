"""
Pay to conditions

In this puzzle program, the solution is ignored. The reveal of the puzzle
returns a fixed list of conditions.

Used as the delegated puzzle of a standard coin, and (quoted directly) as the
throwaway inner puzzle of an eve DOG.
"""

from __future__ import annotations

from collections.abc import Iterable

from chia_puzzles_py.programs import P2_CONDITIONS

from chia_dog.types.blockchain_format.program import Program
from chia_dog.wallet.conditions import Condition

MOD = Program.from_bytes(P2_CONDITIONS)


def puzzle_for_conditions(conditions: Iterable[Condition]) -> Program:
    return MOD.run([[condition.to_program() for condition in conditions]])


def quoted_conditions(conditions: Iterable[Condition]) -> Program:
    # `(q . conditions)`, a puzzle that returns the conditions whatever the solution
    return Program.to((1, [condition.to_program() for condition in conditions]))
