# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:40:18
# @Author : Kariko Lin

import logging

from .ini import (
    IniEntry,
    IniMode,
    IniParser,
    IniStore,
    IniStoreClosedError,
    IniYamlParser,
    NUMBER_MAX,
    NUMBER_MIN
)

__all__ = [
    'IniEntry', 'IniMode', 'IniParser', 'IniYamlParser',
    'IniStore', 'IniStoreClosedError',
    'NUMBER_MAX', 'NUMBER_MIN'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
