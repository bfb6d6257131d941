"""Tests for INI text parsing and serialization."""

import os
import tempfile
import unittest

from pyinin import IniEntry, IniParser
from pyinin.ini.parser import dumps, loads


class TestLoads(unittest.TestCase):

    def test_sections_and_pairs(self):
        entries = loads(
            '[Section]\n'
            'key1="string value"\n'
            'key2=123.45\n'
            '[Other]\n'
            'key4="x"\n')
        self.assertEqual(entries, [
            IniEntry('Section', 'key1', 'string value'),
            IniEntry('Section', 'key2', '123.45'),
            IniEntry('Other', 'key4', 'x'),
        ])

    def test_quoted_form_wins(self):
        entries = loads('[S]\nk="a=b"\n')
        self.assertEqual(entries[0].key, 'k')
        self.assertEqual(entries[0].value, 'a=b')

    def test_bare_value_kept_as_is(self):
        entries = loads('[S]\nk = some text \n')
        self.assertEqual(entries[0].key, 'k')
        self.assertEqual(entries[0].value, ' some text ')

    def test_section_name_trimmed(self):
        entries = loads('[ S ]\nk=1\n')
        self.assertEqual(entries[0].section, 'S')

    def test_pairs_before_any_section(self):
        entries = loads('k="v"\n[S]\nk="w"\n')
        self.assertEqual(entries[0].section, '')
        self.assertEqual(entries[1].section, 'S')

    def test_duplicates_keep_first_position(self):
        entries = loads('[S]\na=1\nb=2\na=3\n')
        self.assertEqual([e.key for e in entries], ['a', 'b'])
        self.assertEqual(entries[0].value, '3')

    def test_ignores_other_lines(self):
        entries = loads('\njunk line\n[S]\n\nk="v"\n')
        self.assertEqual(len(entries), 1)

    def test_leading_bom(self):
        entries = loads('\ufeff[S]\nk="v"\n')
        self.assertEqual(entries, [IniEntry('S', 'k', 'v')])

    def test_bracket_value_is_not_a_header(self):
        entries = loads('[S]\nk="[x]"\n')
        self.assertEqual(entries, [IniEntry('S', 'k', '[x]')])

    def test_crlf(self):
        entries = loads('[S]\r\nk="v"\r\nn=2\r\n')
        self.assertEqual(entries[0].value, 'v')
        self.assertEqual(entries[1].value, '2')


class TestDumps(unittest.TestCase):

    def test_quotes_only_strings(self):
        text = dumps([
            IniEntry('S', 'K', 'hello'),
            IniEntry('S', 'N', 3.14),
        ])
        self.assertEqual(text, '[S]\nK="hello"\nN=3.14\n')

    def test_header_per_run(self):
        text = dumps([
            IniEntry('A', 'x', '1'),
            IniEntry('B', 'y', '2'),
            IniEntry('A', 'z', '3'),
        ])
        self.assertEqual(text, '[A]\nx=1\n[B]\ny=2\n[A]\nz=3\n')

    def test_no_header_for_empty_section(self):
        self.assertEqual(dumps([IniEntry('', 'k', 'v')]), 'k="v"\n')

    def test_round_trip(self):
        entries = [
            IniEntry('S', 'K', 'hello world'),
            IniEntry('S', 'N', '-2.5e3'),
            IniEntry('T', 'K', ''),
        ]
        self.assertEqual(loads(dumps(entries)), entries)

    def test_nested_quotes_are_lossy(self):
        entries = loads(dumps([IniEntry('S', 'k', 'x="y"')]))
        self.assertNotEqual(entries, [IniEntry('S', 'k', 'x="y"')])


class TestIniParser(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'test.ini')

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            IniParser(self.path).read()

    def test_create(self):
        parser = IniParser(self.path)
        self.assertTrue(parser.create())
        self.assertFalse(parser.create())
        self.assertEqual(parser.read(), [])

    def test_write_read(self):
        parser = IniParser(self.path)
        parser.write([IniEntry('S', 'K', 'v')])
        with open(self.path, encoding='utf-8') as fp:
            self.assertEqual(fp.read(), '[S]\nK="v"\n')
        self.assertEqual(parser.read(), [IniEntry('S', 'K', 'v')])

    def test_encoding_and_str(self):
        parser = IniParser(self.path, 'gbk')
        self.assertEqual(parser.encoding, 'gbk')
        self.assertEqual(parser.filename, self.path)
        self.assertEqual(str(parser), f'INI file: {self.path}(gbk)')

    def test_decoding_fallback(self):
        with open(self.path, 'wb') as fp:
            fp.write('[S]\nname="Café crème"\n'.encode('latin-1'))
        with self.assertLogs(level='WARNING'):
            entries = IniParser(self.path).read()
        self.assertEqual(entries[0].key, 'name')
        self.assertTrue(entries[0].value.startswith('Caf'))


if __name__ == "__main__":
    unittest.main()
