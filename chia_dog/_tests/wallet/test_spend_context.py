from __future__ import annotations

from chia_rs import G2Element
from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.coin import Coin
from chia_dog.types.blockchain_format.program import INFINITE_COST, Program
from chia_dog.util.config import load_config
from chia_dog.wallet.puzzle_layer import Spend
from chia_dog.wallet.spend_context import SpendContext, make_spend


def test_spend_context_take() -> None:
    ctx = SpendContext()
    first = Coin(bytes32([1] * 32), bytes32([2] * 32), uint64(1))
    second = Coin(bytes32([1] * 32), bytes32([2] * 32), uint64(2))
    ctx.spend(first, Spend(Program.to(1), Program.to([[51, bytes32([2] * 32), 1]])))
    ctx.spend(second, Spend(Program.to(1), Program.to(None)))

    bundle = ctx.take()
    assert [coin_spend.coin for coin_spend in bundle.coin_spends] == [first, second]
    assert bundle.aggregated_signature == G2Element()
    assert bytes(bundle.coin_spends[0].puzzle_reveal) == bytes(Program.to(1))
    assert ctx.coin_spends == []
    assert ctx.take().coin_spends == []


def test_make_spend() -> None:
    coin = Coin(bytes32([1] * 32), bytes32([2] * 32), uint64(1))
    coin_spend = make_spend(coin, Program.to(1), Program.to([1, 2]))
    assert coin_spend.coin == coin
    assert Program.from_bytes(bytes(coin_spend.solution)) == Program.to([1, 2])


def test_spend_context_run() -> None:
    ctx = SpendContext()
    assert ctx.run(Program.to(1), Program.to([5])) == Program.to([5])


def test_spend_context_max_cost() -> None:
    assert SpendContext().max_cost == INFINITE_COST
    config = load_config()
    config["dog_driver"]["max_cost"] = 1234
    assert SpendContext(config).max_cost == 1234
