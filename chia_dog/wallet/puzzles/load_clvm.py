from __future__ import annotations

from typing import Optional

import importlib_resources
from chia_rs.sized_bytes import bytes32

from chia_dog.types.blockchain_format.program import Program
from chia_dog.util.errors import InvalidModHash

here_name = __name__.rpartition(".")[0]


def load_clvm_hex(
    clvm_filename: str, package_or_requirement: str = here_name, expected_hash: Optional[bytes32] = None
) -> Program:
    """
    Returns the contents of the compiled `<clvm_filename>.hex` file shipped in the given package
    as a `Program`. The DOG puzzles ship compiled only, there is no chialisp source to rebuild from.

    clvm_filename: file name
    package_or_requirement: usually `__name__` if the clvm file is in the same package
    expected_hash: the well known tree hash of the program, the load fails if the blob hashes differently
    """
    hex_filename = f"{clvm_filename}.hex"
    clvm_path = importlib_resources.files(package_or_requirement).joinpath(hex_filename)
    clvm_hex = clvm_path.read_text(encoding="utf-8")
    assert len(clvm_hex.strip()) != 0
    clvm_blob = bytes.fromhex(clvm_hex.strip())
    program = Program.from_bytes(clvm_blob)
    if expected_hash is not None and program.get_tree_hash() != expected_hash:
        raise InvalidModHash(
            f"{hex_filename} hashes to {program.get_tree_hash().hex()}, expected {expected_hash.hex()}"
        )
    return program
