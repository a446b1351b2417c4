from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from chia_rs import CoinSpend, G1Element
from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.coin import Coin
from chia_dog.types.blockchain_format.program import INFINITE_COST, Program
from chia_dog.util.casts import fits_int64, fits_uint64
from chia_dog.util.condition_tools import conditions_for_solution
from chia_dog.util.errors import ArithmeticOverflow, Err
from chia_dog.wallet.conditions import Condition, CreateCoin, RunDogTail, conditions_from_output, created_coins
from chia_dog.wallet.dog_wallet.dog_layer import CoinProof, DogLayer, DogSolution
from chia_dog.wallet.dog_wallet.dog_puzzles import dog_puzzle_hash_for_inner_puzzle_hash
from chia_dog.wallet.lineage_proof import LineageProof
from chia_dog.wallet.puzzle_layer import RawLayer, Spend
from chia_dog.wallet.puzzles.p2_conditions import quoted_conditions
from chia_dog.wallet.puzzles.tails import EverythingWithSig, GenesisById
from chia_dog.wallet.spend_context import SpendContext

log = logging.getLogger(__name__)


def _coin_amount(amount: int) -> uint64:
    if not fits_uint64(amount):
        raise ArithmeticOverflow(Err.AMOUNT_OUT_OF_RANGE, f"coin amount {amount} does not fit in 64 bits")
    return uint64(amount)


# the ring data for spending one DOG
@dataclass(frozen=True)
class SingleDogSpend:
    prev_coin_id: bytes32
    next_coin_proof: CoinProof
    prev_subtotal: int
    extra_delta: int
    inner_spend: Spend

    @classmethod
    def eve(cls, coin: Coin, inner_puzzle_hash: bytes32, inner_spend: Spend) -> SingleDogSpend:
        """
        A ring of one: the coin is its own previous and next coin.
        """
        return cls(
            prev_coin_id=coin.name(),
            next_coin_proof=CoinProof(coin.parent_coin_info, inner_puzzle_hash, uint64(coin.amount)),
            prev_subtotal=0,
            extra_delta=0,
            inner_spend=inner_spend,
        )


@dataclass(frozen=True)
class Dog:
    coin: Coin
    # None only for the eve coin
    lineage_proof: Optional[LineageProof]
    amount: int
    asset_id: bytes32
    inner_puzzle_hash: bytes32

    @classmethod
    def single_issuance_eve(
        cls,
        ctx: SpendContext,
        parent_coin_id: bytes32,
        amount: int,
        extra_conditions: Sequence[Condition],
    ) -> tuple[list[Condition], Dog]:
        """
        Issues a DOG that can never be minted or melted again, its TAIL only runs for `parent_coin_id`.
        """
        tail = GenesisById.for_coin_id(parent_coin_id)
        return cls.create_and_spend_eve(
            ctx,
            parent_coin_id,
            tail.get_tree_hash(),
            amount,
            [*extra_conditions, RunDogTail(tail)],
        )

    @classmethod
    def multi_issuance_eve(
        cls,
        ctx: SpendContext,
        parent_coin_id: bytes32,
        public_key: G1Element,
        amount: int,
        extra_conditions: Sequence[Condition],
    ) -> tuple[list[Condition], Dog]:
        """
        Issues a DOG whose supply can change later on, whenever `public_key` signs the spend.
        """
        tail = EverythingWithSig.for_public_key(public_key)
        return cls.create_and_spend_eve(
            ctx,
            parent_coin_id,
            tail.get_tree_hash(),
            amount,
            [*extra_conditions, RunDogTail(tail)],
        )

    @classmethod
    def create_and_spend_eve(
        cls,
        ctx: SpendContext,
        parent_coin_id: bytes32,
        asset_id: bytes32,
        amount: int,
        conditions: Sequence[Condition],
    ) -> tuple[list[Condition], Dog]:
        """
        Creates and spends an eve DOG that outputs `conditions`. To issue anything the conditions
        have to reveal the TAIL, see `RunDogTail`.

        Returns the conditions the parent coin must output to create the eve coin, and the eve DOG.
        """
        inner_puzzle = quoted_conditions(conditions)
        inner_puzzle_hash = inner_puzzle.get_tree_hash()
        eve_layer = DogLayer(amount, asset_id, RawLayer(inner_puzzle))
        puzzle_hash = eve_layer.tree_hash()

        eve = cls(Coin(parent_coin_id, puzzle_hash, uint64(0)), None, amount, asset_id, inner_puzzle_hash)
        log.debug(f"Spending eve DOG {eve.coin.name().hex()} of asset {asset_id.hex()}")
        eve.spend(ctx, SingleDogSpend.eve(eve.coin, inner_puzzle_hash, Spend(inner_puzzle, Program.to(None))))

        return [CreateCoin(puzzle_hash, uint64(0))], eve

    @staticmethod
    def spend_all(ctx: SpendContext, dog_spends: Sequence[DogSpend]) -> None:
        """
        Spends every DOG in `dog_spends` as one ring. Each coin learns the id of the previous coin,
        enough about the next coin to rebuild its id, and the running total of the deltas before it.

        Whether the deltas add up is only checked when the spends are validated, not here.
        """
        n = len(dog_spends)
        total_delta = 0

        for index, dog_spend in enumerate(dog_spends):
            dog = dog_spend.dog
            inner_spend = dog_spend.inner_spend

            # figure out the delta by running the inner puzzle
            output = ctx.run(inner_spend.puzzle, inner_spend.solution)
            delta = dog.coin.amount - dog_spend.extra_delta
            for create_coin in created_coins(conditions_from_output(output)):
                delta -= create_coin.amount

            prev_subtotal = total_delta
            total_delta += delta
            if not fits_int64(prev_subtotal):
                raise ArithmeticOverflow(
                    Err.INT64_OVERFLOW,
                    f"subtotal {prev_subtotal} before DOG {dog.coin.name().hex()} does not fit in 64 bits",
                )

            prev_spend = dog_spends[(index - 1) % n]
            next_spend = dog_spends[(index + 1) % n]

            log.debug(f"DOG ring member {index}/{n}: delta {delta}, prev_subtotal {prev_subtotal}")
            dog.spend(
                ctx,
                SingleDogSpend(
                    prev_coin_id=prev_spend.dog.coin.name(),
                    next_coin_proof=CoinProof(
                        next_spend.dog.coin.parent_coin_info,
                        next_spend.inner_spend.puzzle.get_tree_hash(),
                        uint64(next_spend.dog.coin.amount),
                    ),
                    prev_subtotal=prev_subtotal,
                    extra_delta=dog_spend.extra_delta,
                    inner_spend=inner_spend,
                ),
            )

    def spend(self, ctx: SpendContext, spend: SingleDogSpend) -> None:
        dog_layer = DogLayer(self.amount, self.asset_id, RawLayer(spend.inner_spend.puzzle))
        puzzle = dog_layer.construct_puzzle()
        solution = dog_layer.construct_solution(
            DogSolution(
                inner_solution=spend.inner_spend.solution,
                lineage_proof=self.lineage_proof,
                prev_coin_id=spend.prev_coin_id,
                this_coin_info=self.coin,
                next_coin_proof=spend.next_coin_proof,
                prev_subtotal=spend.prev_subtotal,
                extra_delta=spend.extra_delta,
            )
        )
        ctx.spend(self.coin, Spend(puzzle, solution))

    def child_lineage_proof(self) -> LineageProof:
        # the curried amount, so the proof rebuilds this coin's puzzle hash even for the eve
        return LineageProof(self.coin.parent_coin_info, self.inner_puzzle_hash, _coin_amount(self.amount))

    def wrapped_child(self, inner_puzzle_hash: bytes32, amount: int) -> Dog:
        """
        The DOG created when this one's inner puzzle outputs `CREATE_COIN inner_puzzle_hash amount`.
        Nothing is run, the child puzzle hash comes from hashes alone.
        """
        puzzle_hash = dog_puzzle_hash_for_inner_puzzle_hash(amount, self.asset_id, inner_puzzle_hash)
        return Dog(
            coin=Coin(self.coin.name(), puzzle_hash, _coin_amount(amount)),
            lineage_proof=self.child_lineage_proof(),
            amount=amount,
            asset_id=self.asset_id,
            inner_puzzle_hash=inner_puzzle_hash,
        )

    @classmethod
    def parse_children(
        cls,
        parent_coin: Coin,
        parent_puzzle: Program,
        parent_solution: Program,
        max_cost: int = INFINITE_COST,
    ) -> Optional[list[Dog]]:
        """
        Rebuilds the DOGs a spent parent created, from its revealed puzzle and solution alone.
        Returns None if the parent is not a DOG.
        """
        parent_layer = DogLayer.parse_puzzle(parent_puzzle)
        if parent_layer is None:
            return None
        solution = DogLayer.parse_solution(parent_solution)

        # only the inner puzzle is run, the outer layer would just wrap each output
        conditions = conditions_for_solution(parent_layer.inner_puzzle.puzzle, solution.inner_solution, max_cost)
        lineage_proof = LineageProof(
            parent_coin.parent_coin_info,
            parent_layer.inner_puzzle.tree_hash(),
            _coin_amount(parent_layer.amount),
        )

        children: list[Dog] = []
        for create_coin in created_coins(conditions):
            wrapped_puzzle_hash = dog_puzzle_hash_for_inner_puzzle_hash(
                create_coin.amount, parent_layer.asset_id, create_coin.puzzle_hash
            )
            children.append(
                cls(
                    coin=Coin(parent_coin.name(), wrapped_puzzle_hash, create_coin.amount),
                    lineage_proof=lineage_proof,
                    amount=create_coin.amount,
                    asset_id=parent_layer.asset_id,
                    inner_puzzle_hash=create_coin.puzzle_hash,
                )
            )
        return children


@dataclass(frozen=True)
class DogSpend:
    dog: Dog
    inner_spend: Spend
    # nonzero only when the inner spend runs the TAIL
    extra_delta: int = 0

    @classmethod
    def with_extra_delta(cls, dog: Dog, inner_spend: Spend, extra_delta: int) -> DogSpend:
        return cls(dog, inner_spend, extra_delta)


def memos_for_child(coin_spend: CoinSpend, coin_id: bytes32, max_cost: int = INFINITE_COST) -> Optional[list[bytes]]:
    """
    Runs `coin_spend` and returns the memos of the CREATE_COIN that created `coin_id`,
    or None if the spend did not create that coin.
    """
    puzzle = Program.from_bytes(bytes(coin_spend.puzzle_reveal))
    solution = Program.from_bytes(bytes(coin_spend.solution))
    parent_id = coin_spend.coin.name()
    for create_coin in created_coins(conditions_for_solution(puzzle, solution, max_cost)):
        if Coin(parent_id, create_coin.puzzle_hash, create_coin.amount).name() == coin_id:
            return [] if create_coin.memos is None else create_coin.memos
    return None
