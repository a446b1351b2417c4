from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional, TypeVar, final

from chia_rs import G1Element
from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.program import Program
from chia_dog.types.condition_opcodes import RUN_TAIL_MAGIC_AMOUNT, ConditionOpcode
from chia_dog.util.errors import DecodeError, Err

_T_Condition = TypeVar("_T_Condition", bound="Condition")


class Condition(ABC):
    @abstractmethod
    def to_program(self) -> Program: ...

    @classmethod
    @abstractmethod
    def from_program(cls: type[_T_Condition], program: Program) -> _T_Condition: ...


@final
@dataclass(frozen=True)
class AggSigMe(Condition):
    pubkey: G1Element
    msg: bytes

    def to_program(self) -> Program:
        condition: Program = Program.to([ConditionOpcode.AGG_SIG_ME, bytes(self.pubkey), self.msg])
        return condition

    @classmethod
    def from_program(cls, program: Program) -> AggSigMe:
        return cls(
            G1Element.from_bytes(program.at("rf").as_atom()),
            program.at("rrf").as_atom(),
        )


@dataclass(frozen=True)
class CreateCoin(Condition):
    puzzle_hash: bytes32
    amount: uint64
    memos: Optional[list[bytes]] = None

    def to_program(self) -> Program:
        condition_args = [ConditionOpcode.CREATE_COIN, self.puzzle_hash, self.amount]
        if self.memos is not None:
            condition_args.append(self.memos)
        condition: Program = Program.to(condition_args)
        return condition

    @classmethod
    def from_program(cls: type[_T_CreateCoin], program: Program) -> _T_CreateCoin:
        potential_memos: Program = program.at("rrr")
        return cls(
            bytes32(program.at("rf").as_atom()),
            uint64(program.at("rrf").as_int()),
            (
                None
                if potential_memos == Program.to(None)
                else [memo.as_atom() for memo in potential_memos.at("f").as_iter()]
            ),
        )


_T_CreateCoin = TypeVar("_T_CreateCoin", bound=CreateCoin)


@final
@dataclass(frozen=True)
class RunDogTail(Condition):
    """
    Asks the outer DOG layer to run the TAIL program, which is the only way the supply may change.
    """

    tail_reveal: Program
    tail_solution: Program = field(default_factory=lambda: Program.to([]))

    def to_program(self) -> Program:
        condition: Program = Program.to(
            [ConditionOpcode.CREATE_COIN, None, RUN_TAIL_MAGIC_AMOUNT, self.tail_reveal, self.tail_solution]
        )
        return condition

    @classmethod
    def from_program(cls, program: Program) -> RunDogTail:
        if program.at("rrf").as_int() != RUN_TAIL_MAGIC_AMOUNT:
            raise ValueError("not a TAIL invocation")
        return cls(program.at("rrrf"), program.at("rrrrf"))


@final
@dataclass(frozen=True)
class ReserveFee(Condition):
    amount: uint64

    def to_program(self) -> Program:
        condition: Program = Program.to([ConditionOpcode.RESERVE_FEE, self.amount])
        return condition

    @classmethod
    def from_program(cls, program: Program) -> ReserveFee:
        return cls(
            uint64(program.at("rf").as_int()),
        )


@final
@dataclass(frozen=True)
class CreateCoinAnnouncement(Condition):
    msg: bytes

    def to_program(self) -> Program:
        condition: Program = Program.to([ConditionOpcode.CREATE_COIN_ANNOUNCEMENT, self.msg])
        return condition

    @classmethod
    def from_program(cls, program: Program) -> CreateCoinAnnouncement:
        return cls(program.at("rf").as_atom())


@final
@dataclass(frozen=True)
class AssertCoinAnnouncement(Condition):
    msg: bytes32

    def to_program(self) -> Program:
        condition: Program = Program.to([ConditionOpcode.ASSERT_COIN_ANNOUNCEMENT, self.msg])
        return condition

    @classmethod
    def from_program(cls, program: Program) -> AssertCoinAnnouncement:
        return cls(bytes32(program.at("rf").as_atom()))


@final
@dataclass(frozen=True)
class UnknownCondition(Condition):
    opcode: Program
    args: list[Program]

    def to_program(self) -> Program:
        return self.opcode.cons(Program.to(self.args))

    @classmethod
    def from_program(cls, program: Program) -> UnknownCondition:
        return cls(
            program.at("f"), [] if program.at("r") == Program.to(None) else [p for p in program.at("r").as_iter()]
        )


CONDITION_DRIVERS: dict[bytes, type[Condition]] = {
    ConditionOpcode.AGG_SIG_ME.value: AggSigMe,
    ConditionOpcode.CREATE_COIN.value: CreateCoin,
    ConditionOpcode.RESERVE_FEE.value: ReserveFee,
    ConditionOpcode.CREATE_COIN_ANNOUNCEMENT.value: CreateCoinAnnouncement,
    ConditionOpcode.ASSERT_COIN_ANNOUNCEMENT.value: AssertCoinAnnouncement,
}


def _driver_for(condition: Program) -> type[Condition]:
    opcode = condition.at("f").as_atom()
    if opcode == ConditionOpcode.CREATE_COIN.value and condition.at("rrf").as_int() == RUN_TAIL_MAGIC_AMOUNT:
        return RunDogTail
    return CONDITION_DRIVERS[opcode]


def parse_conditions_non_consensus(conditions: Iterable[Program]) -> list[Condition]:
    final_condition_list: list[Condition] = []
    for condition in conditions:
        try:
            final_condition_list.append(_driver_for(condition).from_program(condition))
        except Exception:
            final_condition_list.append(UnknownCondition.from_program(condition))

    return final_condition_list


def conditions_from_output(output: Program) -> list[Condition]:
    """
    Decodes the output of a puzzle into conditions. The output must be a proper list
    whose items are all non-empty lists, otherwise it is not an effect list at all.
    """
    try:
        items = output.as_list()
    except ValueError as e:
        raise DecodeError(Err.INVALID_CONDITION_LIST, f"puzzle output is not a list: {output}") from e
    for item in items:
        if item.pair is None:
            raise DecodeError(Err.INVALID_CONDITION_LIST, f"condition is not a list: {item}")
    return parse_conditions_non_consensus(items)


def created_coins(conditions: Iterable[Condition]) -> list[CreateCoin]:
    return [condition for condition in conditions if isinstance(condition, CreateCoin)]
