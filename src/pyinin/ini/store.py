# -*- encoding: utf-8 -*-
# @File   : store.py
# @Time   : 2024/10/13 01:26:44
# @Author : Kariko Lin

"""File-backed INI entries with query / upsert / delete operations.

Missing stuffs are NOT errors here. Lookups answer with sentinels instead:
`None` for strings, `NUMBER_MAX` for absent numbers,
`NUMBER_MIN` for values that aren't numbers, `False` for predicates.
"""

import logging
from os import PathLike
from os.path import abspath
from types import TracebackType
from typing import Self
from warnings import warn

from .export import to_dict
from .model import NUMBER_MAX, IniEntry, IniMode, IniValue
from .parser import IniParser

__all__ = ['IniStore', 'IniStoreClosedError']


class IniStoreClosedError(Exception):
    """Raised on any operation after `IniStore.close()`."""
    pass


class IniStore:
    """INI 文件读写。文件不存在时会新建一个空文件。

    With `IniMode.UPDATE_ON_ACTION` (default) every mutation is saved
    immediately, and string/number lookups re-read the file beforehand.
    With `IniMode.UPDATE_ON_DISPOSE` changes stay in memory until `close()`.

    Prefer the `with` statement so the store always gets closed:

        ```python
        with IniStore('settings.ini') as ini:
            ini.set_value('Video', 'Width', 1920)
        ```
    """

    def __init__(
        self,
        filename: str | PathLike[str],
        mode: IniMode = IniMode.UPDATE_ON_ACTION, *,
        encoding: str = 'utf-8'
    ) -> None:
        self.__io = IniParser(filename, encoding)
        self.__io.create()
        self.__entries: list[IniEntry] = self.__io.read()
        self.__modified = False
        self.__closed = False
        self.mode = mode

    # -- state --

    def __check_open(self) -> None:
        if self.__closed:
            raise IniStoreClosedError(f'{self!r} is already closed.')

    @property
    def closed(self) -> bool:
        return self.__closed

    @property
    def modified(self) -> bool:
        """Whether there are changes not saved yet."""
        return self.__modified

    @property
    def filename(self) -> str:
        self.__check_open()
        return self.__io.filename

    @property
    def entries(self) -> list[IniEntry]:
        """The cached entries.

        It's the live list, and changes made through it bypass
        saving and won't mark the store modified.
        """
        self.__check_open()
        return self.__entries

    # -- sync --

    def __reload(self) -> None:
        self.__entries = self.__io.read()

    def __apply(self) -> None:
        self.__io.write(self.__entries)
        self.__modified = False
        # keep the cache exactly what the file now says.
        self.__reload()

    def __after_mutation(self) -> None:
        self.__modified = True
        if self.mode is IniMode.UPDATE_ON_ACTION:
            self.__apply()

    def __find(self, section: str, key: str) -> int:
        for i, e in enumerate(self.__entries):
            if e.section == section and e.key == key:
                return i
        return -1

    def __get_entry(self, section: str, key: str) -> IniEntry | None:
        i = self.__find(section, key)
        return None if i < 0 else self.__entries[i]

    # -- queries --

    def get_sections(self) -> list[str]:
        """Distinct sections, in the order they first appear."""
        self.__check_open()
        return list(dict.fromkeys(e.section for e in self.__entries))

    def get_keys(self, section: str) -> list[str]:
        self.__check_open()
        return [e.key for e in self.__entries if e.section == section]

    def get_string_value(self, section: str, key: str) -> str | None:
        """Returns `None` if `section`/`key` isn't found."""
        self.__check_open()
        if self.mode is IniMode.UPDATE_ON_ACTION:
            self.__reload()
        entry = self.__get_entry(section, key)
        return None if entry is None else str(entry.value)

    def get_number_value(self, section: str, key: str) -> float:
        """Returns `NUMBER_MAX` if `section`/`key` isn't found,
        or `NUMBER_MIN` if the value is not a number."""
        self.__check_open()
        if self.mode is IniMode.UPDATE_ON_ACTION:
            self.__reload()
        entry = self.__get_entry(section, key)
        if entry is None:
            return NUMBER_MAX
        return entry.to_number()

    def section_exists(self, section: str) -> bool:
        self.__check_open()
        return any(e.section == section for e in self.__entries)

    def key_exists(self, section: str, key: str) -> bool:
        self.__check_open()
        return self.__find(section, key) >= 0

    def is_number(self, section: str, key: str) -> bool:
        self.__check_open()
        entry = self.__get_entry(section, key)
        return entry is not None and entry.is_number()

    def to_dict(self) -> dict[str, dict[str, IniValue]]:
        """`{section: {key: value}}`, numeric texts turned into numbers."""
        self.__check_open()
        return to_dict(self.__entries)

    # -- mutations --

    def __upsert(self, entry: IniEntry) -> None:
        i = self.__find(entry.section, entry.key)
        if i < 0:
            self.__entries.append(entry)
        else:
            self.__entries[i] = entry

    def set_value(self, section: str, key: str, value: IniValue) -> Self:
        """Update the value of `section`/`key`, or add it if not found.

        Returns the store itself, so calls can be chained.
        """
        self.__check_open()
        entry = self.__get_entry(section.strip(), key.strip())
        if entry is None:
            self.__entries.append(IniEntry(section, key, str(value)))
        else:
            entry.value = value
        self.__after_mutation()
        return self

    def set_entry(self, entry: IniEntry) -> Self:
        """Add `entry`, or replace the one with same section and key."""
        self.__check_open()
        self.__upsert(entry)
        self.__after_mutation()
        return self

    def set_entries(self, *entries: IniEntry) -> Self:
        self.__check_open()
        # even an empty call counts as a change, saved at `close()`.
        self.__modified = True
        for i in entries:
            self.set_entry(i)
        return self

    def delete_section(self, section: str) -> int:
        """Remove all entries of `section`. Returns how many are removed."""
        self.__check_open()
        remains = [e for e in self.__entries if e.section != section]
        removed = len(self.__entries) - len(remains)
        self.__entries = remains
        self.__after_mutation()
        return removed

    def delete_key(self, section: str, key: str) -> bool:
        """Returns `False` if `section`/`key` isn't found."""
        self.__check_open()
        # a miss is not saved now, but still marks the store modified.
        self.__modified = True
        i = self.__find(section, key)
        if i < 0:
            return False
        del self.__entries[i]
        self.__after_mutation()
        return True

    # -- lifecycle --

    def close(self) -> None:
        """Save pending changes and release the store.

        Any later call, `close()` included, raises `IniStoreClosedError`.
        """
        self.__check_open()
        if self.__modified:
            self.__apply()
        self.__entries.clear()
        self.__closed = True
        logging.debug(f'Closed "{self.__io.filename}".')

    def __enter__(self) -> Self:
        self.__check_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None
    ) -> None:
        # closed manually inside the block, nothing to flush.
        if not self.__closed:
            self.close()

    def __del__(self) -> None:
        # __init__ may fail before these are set.
        if getattr(self, '_IniStore__closed', True):
            return
        if self.__modified:
            warn(
                f'{self!r} was never closed, '
                'unsaved changes are discarded.', ResourceWarning)

    # -- identity --

    def __eq__(self, other: object) -> bool:
        self.__check_open()
        if not isinstance(other, IniStore):
            return NotImplemented
        # a closed store has no file any more.
        if other.__closed:
            return False
        return other.__io.filename == self.__io.filename

    def __hash__(self) -> int:
        self.__check_open()
        return hash(self.__io.filename)

    def __str__(self) -> str:
        self.__check_open()
        return abspath(self.__io.filename)

    def __repr__(self) -> str:
        return '<IniStore "%s" { .mode = %s, .cnt = %d }>' % (
            self.__io.filename, self.mode.name, len(self.__entries))
