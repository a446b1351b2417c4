from __future__ import annotations

import logging
from typing import Any, Optional

from chia_rs import CoinSpend, G2Element, SpendBundle
from chia_rs import Program as SerializedProgram

from chia_dog.types.blockchain_format.coin import Coin
from chia_dog.types.blockchain_format.program import INFINITE_COST, Program
from chia_dog.util.condition_tools import run_puzzle
from chia_dog.util.config import SERVICE_NAME
from chia_dog.wallet.puzzle_layer import Spend

log = logging.getLogger(__name__)

NULL_SIGNATURE = G2Element()


def make_spend(coin: Coin, puzzle_reveal: Program, solution: Program) -> CoinSpend:
    return CoinSpend(
        coin,
        SerializedProgram.from_bytes(bytes(puzzle_reveal)),
        SerializedProgram.from_bytes(bytes(solution)),
    )


class SpendContext:
    """
    Collects coin spends for one transaction. Spends are appended in the order they are made
    and handed out as a single unsigned `SpendBundle` by `take()`.

    Not safe for concurrent use. If building a transaction fails part way, throw the context away.
    """

    coin_spends: list[CoinSpend]
    max_cost: int

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        self.coin_spends = []
        self.max_cost = INFINITE_COST
        if config is not None:
            self.max_cost = int(config.get(SERVICE_NAME, {}).get("max_cost", INFINITE_COST))

    def spend(self, coin: Coin, spend: Spend) -> None:
        log.debug(f"Adding spend of coin {coin.name().hex()} to the spend context")
        self.coin_spends.append(make_spend(coin, spend.puzzle, spend.solution))

    def run(self, puzzle: Program, solution: Program) -> Program:
        return run_puzzle(puzzle, solution, self.max_cost)

    def take(self) -> SpendBundle:
        """
        Returns all the spends made so far as an unsigned bundle and starts over.
        Signing is up to the caller.
        """
        coin_spends, self.coin_spends = self.coin_spends, []
        return SpendBundle(coin_spends, NULL_SIGNATURE)
