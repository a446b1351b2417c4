from __future__ import annotations

from chia_puzzles_py.programs import EVERYTHING_WITH_SIGNATURE, GENESIS_BY_COIN_ID
from chia_rs import G1Element
from chia_rs.sized_bytes import bytes32

from chia_dog.types.blockchain_format.program import Program

GENESIS_BY_ID_MOD = Program.from_bytes(GENESIS_BY_COIN_ID)

EVERYTHING_WITH_SIG_MOD = Program.from_bytes(EVERYTHING_WITH_SIGNATURE)


class LimitationsProgram:
    @staticmethod
    def construct(args: list[Program]) -> Program:
        raise NotImplementedError("Need to implement 'construct' on limitations programs")


class GenesisById(LimitationsProgram):
    """
    This TAIL allows for coins to be issued only by a specific "genesis" coin ID.
    There can therefore only be one issuance. There is no minting or melting allowed.
    """

    @staticmethod
    def construct(args: list[Program]) -> Program:
        return GENESIS_BY_ID_MOD.curry(args[0])

    @classmethod
    def for_coin_id(cls, genesis_coin_id: bytes32) -> Program:
        return cls.construct([Program.to(genesis_coin_id)])


class EverythingWithSig(LimitationsProgram):
    """
    This TAIL allows for issuance, minting, and melting as long as you provide a signature with the spend.
    """

    @staticmethod
    def construct(args: list[Program]) -> Program:
        return EVERYTHING_WITH_SIG_MOD.curry(args[0])

    @classmethod
    def for_public_key(cls, public_key: G1Element) -> Program:
        return cls.construct([Program.to(bytes(public_key))])
