from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from chia_rs.sized_bytes import bytes32

from chia_dog.types.blockchain_format.program import Program
from chia_dog.wallet.lineage_proof import LineageProof
from chia_dog.wallet.puzzles.load_clvm import load_clvm_hex
from chia_dog.wallet.uncurried_puzzle import UncurriedPuzzle
from chia_dog.wallet.util.curry_and_treehash import curry_tree_hash, shatree_atom, shatree_int

DOG_MOD_HASH = bytes32.fromhex("cbdf86d15fada4046eebe75967646933389e1414955cf60fb436578cdc1145b2")
DOG_MOD = load_clvm_hex("dog.clsp", package_or_requirement="chia_dog.wallet.puzzles", expected_hash=DOG_MOD_HASH)

DOG_LAUNCHER_MOD_HASH = bytes32.fromhex("cd4d3dd1d1b9a30ac5b1b443795c6070b5fc36b9599bf21a153995db7731d57b")
DOG_LAUNCHER_MOD = load_clvm_hex(
    "dog_launcher.clsp", package_or_requirement="chia_dog.wallet.puzzles", expected_hash=DOG_LAUNCHER_MOD_HASH
)

DOG_MOD_HASH_TREEHASH = shatree_atom(DOG_MOD_HASH)


def construct_dog_puzzle(amount: int, asset_id: bytes32, inner_puzzle: Program) -> Program:
    """
    Given an amount, a TAIL hash and an inner puzzle, build the full DOG puzzle.
    """
    return DOG_MOD.curry(DOG_MOD_HASH, amount, asset_id, inner_puzzle)


def dog_puzzle_hash_for_inner_puzzle_hash(amount: int, asset_id: bytes32, inner_puzzle_hash: bytes32) -> bytes32:
    """
    The puzzle hash `construct_dog_puzzle` would produce, computed from hashes only.
    """
    return curry_tree_hash(
        DOG_MOD_HASH,
        DOG_MOD_HASH_TREEHASH,
        shatree_int(amount),
        shatree_atom(asset_id),
        inner_puzzle_hash,
    )


def match_dog_puzzle(puzzle: UncurriedPuzzle) -> Optional[Iterator[Program]]:
    """
    Given the curried puzzle and args, test if it's a DOG and,
    if it is, return the curried arguments
    """
    if puzzle.mod_hash == DOG_MOD_HASH:
        ret: Iterator[Program] = puzzle.args.as_iter()
        return ret
    else:
        return None


def parent_puzzle_hash_for_lineage(asset_id: bytes32, lineage_proof: LineageProof) -> bytes32:
    # the full puzzle hash the lineage proof claims for the parent, built from its curried amount
    return dog_puzzle_hash_for_inner_puzzle_hash(lineage_proof.amount, asset_id, lineage_proof.inner_puzzle_hash)
