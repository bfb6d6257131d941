# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 01:31:09
# @Author : Kariko Lin

from .model import IniEntry, IniMode, NUMBER_MAX, NUMBER_MIN
from .parser import IniParser, loads, dumps
from .store import IniStore, IniStoreClosedError
from .export import IniYamlParser
