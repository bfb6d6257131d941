# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/10/14 23:08:51
# @Author : Kariko Lin

"""YAML snapshot of INI entries, like:

    ```yaml
    Section:
      name: a string value
      ratio: 0.3
    ```

Good for reviewing diffs, or seeding a store with `set_entries()`.
"""

from os import PathLike
from time import localtime, strftime
from typing import Iterable

import yaml

from ..abstract import FileHandler
from .model import IniEntry, IniValue, parse_number

__all__ = ['IniYamlParser', 'to_dict', 'from_dict']


def _to_scalar(entry: IniEntry) -> IniValue:
    if isinstance(entry.value, (int, float)) or not entry.is_number():
        return entry.value
    try:
        return int(entry.value)
    except ValueError:
        # it is numeric, checked above.
        return parse_number(entry.value)  # type: ignore[return-value]


def to_dict(entries: Iterable[IniEntry]) -> dict[str, dict[str, IniValue]]:
    """Group entries by section, keeping the first-appearance order."""
    ret: dict[str, dict[str, IniValue]] = {}
    for i in entries:
        ret.setdefault(i.section, {})[i.key] = _to_scalar(i)
    return ret


def from_dict(data: dict[str, dict[str, object]]) -> list[IniEntry]:
    ret: list[IniEntry] = []
    for sect, pairs in data.items():
        # `[Section]` with no pairs loads as None.
        for k, v in (pairs or {}).items():
            # bools and nulls are just strings here.
            if not isinstance(v, (int, float)) or isinstance(v, bool):
                v = '' if v is None else str(v)
            ret.append(IniEntry(str(sect), str(k), v))
    return ret


class IniYamlParser(FileHandler[list[IniEntry]]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> list[IniEntry]:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            data = yaml.safe_load(fp)
        return from_dict(data or {})

    def write(self, instance: Iterable[IniEntry]) -> None:
        instance = list(instance)
        curtime = strftime("%Y-%m-%d %H:%M:%S", localtime())
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(
                f'# entry count: {len(instance)}\n'
                f'# build time: {curtime}\n'
            )
            yaml.safe_dump(
                to_dict(instance), fp,
                allow_unicode=True, sort_keys=False)
