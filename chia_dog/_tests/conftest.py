from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from chia_rs import AugSchemeMPL, G1Element, PrivateKey
from chia_rs.sized_bytes import bytes32
from chia_rs.sized_ints import uint64

from chia_dog.types.blockchain_format.coin import Coin
from chia_dog.wallet.spend_context import SpendContext
from chia_dog.wallet.standard_layer import StandardLayer
from chia_dog.wallet.util.curry_and_treehash import shatree_atom


@pytest.fixture(name="secret_key")
def secret_key_fixture() -> PrivateKey:
    return AugSchemeMPL.key_gen(bytes([1] * 32))


@pytest.fixture(name="public_key")
def public_key_fixture(secret_key: PrivateKey) -> G1Element:
    return secret_key.get_g1()


@pytest.fixture(name="p2")
def p2_fixture(public_key: G1Element) -> StandardLayer:
    return StandardLayer.from_public_key(public_key)


@pytest.fixture(name="funding_coin")
def funding_coin_fixture(p2: StandardLayer) -> Coin:
    return Coin(shatree_atom(b"funding parent"), p2.tree_hash(), uint64(10000))


@pytest.fixture(name="asset_id")
def asset_id_fixture() -> bytes32:
    return bytes32([1] * 32)


@pytest.fixture(name="ctx")
def ctx_fixture() -> SpendContext:
    return SpendContext()


@pytest.fixture(name="restore_root_logger")
def restore_root_logger_fixture() -> Iterator[logging.Logger]:
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
