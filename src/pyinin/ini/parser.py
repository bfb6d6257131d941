# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/12 22:15:37
# @Author : Kariko Lin

"""Text <-> entries conversion for the quoted INI dialect:

    ```ini
    [Section]
    name="a string value"
    ratio=0.3
    ```

`loads()` and `dumps()` are pure; `IniParser` only adds file IO.

Note: quotes inside a value are NOT escaped.
`a"b` is written as `k="a"b"` and read back as `a"b` only by luck of
the greedy pattern, while `x="y"` is written as `k="x="y""` and read back
as key `k="x` with value `y`. Line breaks in values split the pair too.
Such round trips are lossy and this module won't fix that.

A `[Section]` header only counts at the start of a line (blanks aside),
so `k="[x]"` stays a pair. A leading UTF-8 BOM is ignored.
"""

import logging
from io import StringIO, TextIOBase
from os import PathLike
from os.path import exists
from re import compile as regex
from typing import Iterable

from chardet import detect as guess_codec

from ..abstract import FileHandler
from .model import IniEntry

__all__ = ['IniParser', 'loads', 'dumps', 'readstream', 'writestream']

_SECTION = regex(r'\s*\[(.*)\]')
_QUOTED_PAIR = regex(r'(.*)=("(.*)")')
_PAIR = regex(r'(.*)=(.*)')


def _upsert(entries: list[IniEntry], entry: IniEntry) -> None:
    for i, old in enumerate(entries):
        if old.section == entry.section and old.key == entry.key:
            entries[i] = entry
            return
    entries.append(entry)


def readstream(buf: TextIOBase) -> list[IniEntry]:
    """读取解码好的字符串流。

    Duplicated `(section, key)` pairs keep the position of
    the first one and the value of the last one.
    """
    ret: list[IniEntry] = []
    this_sect = ''
    for line in buf:
        line = line.rstrip('\r\n').lstrip('\ufeff')
        if (m := _SECTION.match(line)) is not None:
            this_sect = m[1]
        # quoted form first, since the bare one matches it too.
        elif (m := _QUOTED_PAIR.search(line)) is not None:
            _upsert(ret, IniEntry(this_sect, m[1], m[3]))
        elif (m := _PAIR.search(line)) is not None:
            _upsert(ret, IniEntry(this_sect, m[1], m[2]))
    return ret


def loads(text: str) -> list[IniEntry]:
    return readstream(StringIO(text))


def _output_pair(entry: IniEntry) -> str:
    if entry.is_number():
        return f'{entry.key}={entry.value}'
    return f'{entry.key}="{entry.value}"'


def writestream(buf: TextIOBase, entries: Iterable[IniEntry]) -> None:
    # a header only opens a run of same-section entries,
    # non-adjacent runs of one section get their own headers.
    last_sect = ''
    for i in entries:
        if i.section != last_sect:
            buf.write(f'[{i.section}]\n')
        buf.write(_output_pair(i) + '\n')
        last_sect = i.section


def dumps(entries: Iterable[IniEntry]) -> str:
    buf = StringIO()
    writestream(buf, entries)
    return buf.getvalue()


class IniParser(FileHandler[list[IniEntry]]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @property
    def encoding(self) -> str:
        return self._codec

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = guess_codec(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 0.0}
        logging.warning(
            f'"{filename}" is not readable as expected, '
            f'retry with {codec["encoding"]}.')

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('latin-1')
        return StringIO(buf)

    def create(self) -> bool:
        """Create an empty file if there isn't one. Returns if created."""
        if exists(self._fn):
            return False
        with open(self._fn, 'w', encoding=self._codec):
            pass
        logging.info(f'Created empty INI "{self._fn}".')
        return True

    def read(self) -> list[IniEntry]:
        """读取`IniParser`实例指定的文件。

        Raises `FileNotFoundError` if the file is gone.
        """
        if not exists(self._fn):
            raise FileNotFoundError(self._fn)
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                ret = readstream(fp)
        except UnicodeDecodeError:
            ret = readstream(self._decode_file(self._fn))
        logging.debug(f'Parsed {len(ret)} entries from "{self._fn}".')
        return ret

    def write(self, instance: Iterable[IniEntry]) -> None:
        """Overwrite the whole file.

        There's no temp file swap, a crash halfway leaves it truncated.
        """
        with open(self._fn, 'w', encoding=self._codec) as fp:
            writestream(fp, instance)
        logging.debug(f'Saved "{self._fn}".')

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
