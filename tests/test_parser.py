import pytest

from xgotext.nodes import Call, String, Number, Name, Expression, Location
from xgotext.errors import Errors, ERROR
from xgotext.parser import parse, parse_file, parse_dir, parse_path
from xgotext.parser import ParseError

from .base import TestCase, ParseMixin, NODE_EQ_PATCHER


class TestCallSites(ParseMixin, TestCase):
    ctx = [NODE_EQ_PATCHER]

    def assertKinds(self, src, kinds):
        node = self.parse(src)
        self.assertEqual(
            [call.args[2].kind for call in node.calls
             if call.method == 'GetN'],
            kinds,
        )

    def testPreOrder(self):
        node = self.parse(
            """
            l.Get("a")
            print(l.GetN("b", 'c', 1))
            """
        )
        self.assertEqual(
            list(node.calls),
            [
                Call('l', 'Get', [String('"a"')]),
                Call(None, 'print', [Expression('l.GetN("b", \'c\', 1)')]),
                Call('l', 'GetN', [String('"b"'), String("'c'"), Number(1)]),
            ],
        )

    def testReceiver(self):
        node = self.parse(
            """
            self.locale.Get("a")
            get_locale().Get("b")
            "abc".Get("c")
            f"{x!r}".Get("d")
            get_locale(
                "fr",
            ).Get("e")
            """
        )
        self.assertEqual(
            [call.label for call in node.calls if call.method == 'Get'],
            ['self.locale.Get', 'get_locale().Get', '"abc".Get',
             'f"{x!r}".Get', 'get_locale( "fr", ).Get'],
        )

    def testCommentsBetweenLiterals(self):
        node = self.parse(
            """
            l.Get("a"  # note
                  "b")
            l.Get("a#b"
                  "c")
            """
        )
        self.assertIsInstance(node.calls[0].args[0], Expression)
        self.assertEqual(node.calls[1].args[0],
                         String('"a#b"\n      "c"'))

    def testCarriageReturns(self):
        for newline in ['\r', '\r\n']:
            node = parse(newline.join(['x = 1', 'l.Get(', '"a")', '']))
            self.assertEqual(node.calls[0].location, Location('<string>', 2))
            self.assertEqual(node.calls[0].args[0], String('"a"'))

    def testTokensAreVerbatim(self):
        node = self.parse(
            r"""
            l.Get("a" "b")
            l.Get('single')
            l.Get("tab\t")
            l.Get(r"raw\d")
            """
        )
        self.assertEqual(
            [call.args[0].token for call in node.calls],
            ['"a" "b"', "'single'", r'"tab\t"', r'r"raw\d"'],
        )

    def testOtherExpressions(self):
        node = self.parse(
            """
            l.Get(f"x{y}")
            l.Get(b"bytes")
            l.Get("a" + "b")
            l.GetN("a", "b", True)
            l.GetN("a", "b", 1.5)
            """
        )
        for call in node.calls:
            self.assertIsInstance(call.args[-1], Expression)

    def testLParenLine(self):
        node = self.parse(
            """
            value = (l
                     .Get
                     ("a"))
            l.Get(
                "b",
            )
            """
        )
        self.assertEqual(
            [call.location for call in node.calls],
            [Location('app.py', 3), Location('app.py', 4)],
        )

    def testNameKinds(self):
        self.assertKinds(
            """
            import os
            from x import y as z

            COUNT = 3

            def f(n, *rest, k=1, **kw):
                for i in range(n):
                    l.GetN("a", "b", i)
                l.GetN("a", "b", os)
                l.GetN("a", "b", z)
                l.GetN("a", "b", f)
                l.GetN("a", "b", COUNT)
                l.GetN("a", "b", k)
                l.GetN("a", "b", missing)
            """,
            [Name.VAR, Name.IMPORT, Name.IMPORT, Name.FUNC, Name.VAR,
             Name.VAR, None],
        )

    def testLocalBindings(self):
        self.assertKinds(
            """
            def f():
                with open("x") as fp:
                    l.GetN("a", "b", fp)
                try:
                    pass
                except Exception as exc:
                    l.GetN("a", "b", exc)
                if (size := 3):
                    l.GetN("a", "b", size)
                total: int
                l.GetN("a", "b", total)
            l.GetN("a", "b", size)
            """,
            [Name.VAR, Name.VAR, Name.VAR, Name.VAR, None],
        )

    def testClassScope(self):
        self.assertKinds(
            """
            class A(object):
                n = 1
                l.GetN("a", "b", n)
                l.GetN("a", "b", A)

                def m(self):
                    l.GetN("a", "b", n)
            l.GetN("a", "b", A)
            """,
            [Name.VAR, Name.CLASS, None, Name.CLASS],
        )

    def testNestedScopes(self):
        self.assertKinds(
            """
            items = [l.GetN("a", "b", x) for x in xs]
            fn = lambda c: l.GetN("a", "b", c)
            l.GetN("a", "b", x)

            def outer(m):
                def inner():
                    l.GetN("a", "b", m)
            """,
            [Name.VAR, Name.VAR, None, Name.VAR],
        )

    def testSyntaxError(self):
        errors = Errors()
        with self.assertRaises(ParseError) as cm:
            parse('x = = 1\n', 'broken.py', errors)
        self.assertEqual(cm.exception.location, Location('broken.py', 1))
        self.assertEqual([e.severity for e in errors.list], [ERROR])
        self.assertTrue(str(cm.exception).startswith('broken.py:1: '))


def test_parse_file(tmp_path):
    path = tmp_path / 'app.py'
    path.write_text('l.Get("привет")\n', encoding='utf-8')
    module = parse_file(str(path))
    assert module.file_path == str(path)
    assert module.calls[0].args[0].token == '"привет"'
    assert module.calls[0].location == Location(str(path), 1)


def test_parse_file_missing(tmp_path):
    with pytest.raises(ParseError):
        parse_file(str(tmp_path / 'missing.py'))


def test_parse_dir(tmp_path):
    (tmp_path / 'b.py').write_text('l.Get("b")\n')
    (tmp_path / 'a.py').write_text('l.Get("a")\n')
    (tmp_path / 'notes.txt').write_text('l.Get("txt")\n')
    (tmp_path / 'sub').mkdir()
    (tmp_path / 'sub' / 'c.py').write_text('l.Get("c")\n')
    package = parse_dir(str(tmp_path))
    assert [m.file_path for m in package.modules] == [
        str(tmp_path / 'a.py'),
        str(tmp_path / 'b.py'),
    ]
    assert len(parse_path(str(tmp_path)).modules) == 2
    module = parse_path(str(tmp_path / 'a.py'))
    assert module.file_path == str(tmp_path / 'a.py')


def test_parse_dir_syntax_error(tmp_path):
    (tmp_path / 'a.py').write_text('l.Get("a")\n')
    (tmp_path / 'b.py').write_text('def (\n')
    with pytest.raises(ParseError) as exc_info:
        parse_dir(str(tmp_path))
    assert exc_info.value.location.file == str(tmp_path / 'b.py')


def test_parse_source_without_calls():
    module = parse('x = 1\n')
    assert module.calls == ()
    assert module.file_path == '<string>'
