from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

# Range of a signed 64-bit C long
LONG_MIN = -2**63
LONG_MAX = 2**63 - 1

class ErrorKind(Enum):
    DIVISION_BY_ZERO = auto()
    INVALID_OPERATOR = auto()
    INVALID_NUMBER = auto()

error_messages = {
    ErrorKind.DIVISION_BY_ZERO: 'Error: Division by zero',
    ErrorKind.INVALID_OPERATOR: 'Error: Invalid operator',
    ErrorKind.INVALID_NUMBER: 'Error: Invalid number'
}

@dataclass(frozen=True)
class Number:
    num: int

    def __str__(self) -> str:
        return str(self.num)

@dataclass(frozen=True)
class Error:
    err: ErrorKind

    def __str__(self) -> str:
        return error_messages[self.err]

Value = Union[Number, Error]
