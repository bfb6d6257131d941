# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 21:52:06
# @Author : Kariko Lin

"""
Basically a flat INI structure: a list of `(section, key, value)` entries.

Values are kept untyped. Whether a value "is a number" is decided
by parsing its text form, never by a stored type tag,
so `3.14` and `'3.14'` are the same thing once written.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from re import compile as regex
from typing import TypeAlias

__all__ = [
    'IniEntry', 'IniMode', 'IniValue',
    'NUMBER_MAX', 'NUMBER_MIN',
    'is_number_text', 'parse_number'
]

IniValue: TypeAlias = str | int | float

# sentinels of `IniStore.get_number_value()` and `IniEntry.to_number()`.
NUMBER_MAX = sys.float_info.max
NUMBER_MIN = -sys.float_info.max

# invariant float text: one sign at most, leading or trailing.
# no thousands grouping, no currency, no `inf`/`nan` words.
_NUMBER = regex(
    r'\s*(?P<lead>[+-]?)'
    r'(?P<body>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)'
    r'(?P<trail>[+-]?)\s*'
)


def parse_number(text: str) -> float | None:
    """Parse `text` as a base-10 float, or `None` if it isn't one."""
    m = _NUMBER.fullmatch(text)
    if m is None or (m['lead'] and m['trail']):
        return None
    num = float(m['body'])
    return -num if '-' in (m['lead'], m['trail']) else num


def is_number_text(text: str) -> bool:
    return parse_number(text) is not None


class IniMode(Enum):
    """When `IniStore` flushes its entries back to the file."""
    UPDATE_ON_ACTION = 0   # after every mutation
    UPDATE_ON_DISPOSE = 1  # once, at `close()`


@dataclass
class IniEntry:
    """One `key=value` pair, plus the section it belongs to.

    Section and key are always stored stripped.
    """
    section: str
    key: str
    value: IniValue = field(default='')

    def __setattr__(self, name: str, value: object) -> None:
        if name in ('section', 'key') and isinstance(value, str):
            value = value.strip()
        super().__setattr__(name, value)

    def is_number(self) -> bool:
        return is_number_text(str(self.value))

    def to_number(self) -> float:
        """Value as `float`, or `NUMBER_MIN` if it is not numeric.

        Check `self.is_number()` first to tell a real `NUMBER_MIN` apart.
        """
        num = parse_number(str(self.value))
        return NUMBER_MIN if num is None else num

    def __str__(self) -> str:
        return f'[{self.section}] {self.key}={self.value}'
