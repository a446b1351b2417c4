from __future__ import annotations

from enum import Enum


class Err(Enum):
    UNKNOWN = 1

    # the program looked like a known layer but its curried arguments lie about it
    INVALID_MOD_HASH = 2

    # malformed puzzles, solutions or condition lists
    INVALID_CURRIED_ARGS = 3
    INVALID_SOLUTION = 4
    INVALID_LINEAGE_PROOF = 5
    INVALID_CONDITION_LIST = 6

    # the executor could not run a program
    SEXP_ERROR = 7

    # narrowing a ring value to the signed 64 bit wire format failed
    INT64_OVERFLOW = 8
    AMOUNT_OUT_OF_RANGE = 9


class DriverError(Exception):
    def __init__(self, code: Err, error_msg: str = ""):
        super().__init__(f"Error code: {code.name} {error_msg}")
        self.code = code
        self.error_msg = error_msg


class InvalidModHash(DriverError):
    def __init__(self, error_msg: str = "") -> None:
        super().__init__(Err.INVALID_MOD_HASH, error_msg)


class DecodeError(DriverError):
    pass


class ExecutionError(DriverError):
    def __init__(self, error_msg: str = "") -> None:
        super().__init__(Err.SEXP_ERROR, error_msg)


class ArithmeticOverflow(DriverError):
    pass
