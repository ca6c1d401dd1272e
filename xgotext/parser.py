import io
import os.path
import ast
import logging
import tokenize

from .nodes import Call, String, Number, Name, Expression, Module, Package
from .nodes import Location
from .errors import UserError, Errors


log = logging.getLogger(__name__)

SOURCE_EXT = '.py'

FUNCTIONS = (ast.FunctionDef, ast.AsyncFunctionDef, ast.Lambda)
COMPREHENSIONS = (ast.ListComp, ast.SetComp, ast.DictComp, ast.GeneratorExp)


class ParseError(UserError):

    def __init__(self, location, message):
        self.location = location
        self.message = message
        super(ParseError, self).__init__(location, message)

    def __str__(self):
        return '{}: {}'.format(self.location, self.message)


class Scope(object):

    def __init__(self, names, parent=None, is_class=False):
        self.names = names
        self.parent = parent
        self.is_class = is_class

    def lookup(self, name):
        try:
            return self.names[name]
        except KeyError:
            pass
        # class bodies are not visible from nested scopes
        scope = self.parent
        while scope is not None:
            if not scope.is_class and name in scope.names:
                return scope.names[name]
            scope = scope.parent
        return None


class Bindings(ast.NodeVisitor):
    """Collects names bound directly in a scope, nested scopes are not
    entered.
    """

    def __init__(self):
        self.names = {}

    @classmethod
    def collect(cls, node):
        self = cls()
        if isinstance(node, FUNCTIONS):
            args = node.args
            for arg in args.posonlyargs + args.args + args.kwonlyargs:
                self.bind(arg.arg, Name.VAR)
            for arg in (args.vararg, args.kwarg):
                if arg is not None:
                    self.bind(arg.arg, Name.VAR)
        if isinstance(node, COMPREHENSIONS):
            for generator in node.generators:
                self.visit(generator.target)
                for if_ in generator.ifs:
                    self.visit(if_)
        elif isinstance(node, ast.Lambda):
            self.visit(node.body)
        else:
            for stmt in node.body:
                self.visit(stmt)
        return self.names

    def bind(self, name, kind):
        if kind == Name.VAR or name not in self.names:
            self.names[name] = kind

    def visit_Name(self, node):
        if isinstance(node.ctx, (ast.Store, ast.Del)):
            self.bind(node.id, Name.VAR)

    def visit_ExceptHandler(self, node):
        if node.name:
            self.bind(node.name, Name.VAR)
        self.generic_visit(node)

    def visit_MatchAs(self, node):
        if node.name:
            self.bind(node.name, Name.VAR)
        self.generic_visit(node)

    def visit_MatchStar(self, node):
        if node.name:
            self.bind(node.name, Name.VAR)

    def visit_MatchMapping(self, node):
        if node.rest:
            self.bind(node.rest, Name.VAR)
        self.generic_visit(node)

    def visit_Import(self, node):
        for alias in node.names:
            self.bind(alias.asname or alias.name.partition('.')[0],
                      Name.IMPORT)

    def visit_ImportFrom(self, node):
        for alias in node.names:
            if alias.name != '*':
                self.bind(alias.asname or alias.name, Name.IMPORT)

    def visit_FunctionDef(self, node):
        self.bind(node.name, Name.FUNC)

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_ClassDef(self, node):
        self.bind(node.name, Name.CLASS)

    def visit_Lambda(self, node):
        pass

    def _skip(self, node):
        pass

    visit_ListComp = visit_SetComp = visit_DictComp = _skip
    visit_GeneratorExp = _skip


class CallSites(ast.NodeVisitor):
    """Collects call expressions in pre-order, an outer call comes before
    the calls nested in its arguments.
    """

    def __init__(self, source, file_path, tree):
        self.file_path = file_path
        self.calls = []
        self._source = source
        self._lines = source.split('\n')
        self._scope = Scope(Bindings.collect(tree))

    @classmethod
    def collect(cls, source, file_path, tree):
        self = cls(source, file_path, tree)
        self.visit(tree)
        return self.calls

    def _push(self, node):
        self._scope = Scope(Bindings.collect(node), self._scope,
                            is_class=isinstance(node, ast.ClassDef))

    def _pop(self):
        self._scope = self._scope.parent

    def visit_FunctionDef(self, node):
        for decorator in node.decorator_list:
            self.visit(decorator)
        self.visit(node.args)
        if node.returns is not None:
            self.visit(node.returns)
        self._push(node)
        try:
            for stmt in node.body:
                self.visit(stmt)
        finally:
            self._pop()

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_ClassDef(self, node):
        for child in node.decorator_list + node.bases + node.keywords:
            self.visit(child)
        self._push(node)
        try:
            for stmt in node.body:
                self.visit(stmt)
        finally:
            self._pop()

    def visit_Lambda(self, node):
        self.visit(node.args)
        self._push(node)
        try:
            self.visit(node.body)
        finally:
            self._pop()

    def _visit_comprehension(self, node):
        self._push(node)
        try:
            self.generic_visit(node)
        finally:
            self._pop()

    visit_ListComp = visit_SetComp = visit_DictComp = _visit_comprehension
    visit_GeneratorExp = _visit_comprehension

    def visit_Call(self, node):
        self.calls.append(self._call(node))
        self.generic_visit(node)

    def _location(self, line):
        return Location(self.file_path, line)

    def _lparen_line(self, node):
        # offsets are in utf-8 bytes
        func = node.func
        col = func.end_col_offset
        for line in range(func.end_lineno, node.end_lineno + 1):
            text = self._lines[line - 1].encode('utf-8')[col:]
            if b'(' in text.partition(b'#')[0]:
                return line
            col = 0
        return node.lineno

    def _segment(self, node):
        # call labels go into a single comment line
        segment = ast.get_source_segment(self._source, node)
        return ' '.join(line.strip() for line in segment.split('\n'))

    def _call(self, node):
        func = node.func
        if isinstance(func, ast.Attribute):
            receiver = self._segment(func.value)
            method = func.attr
        else:
            receiver = None
            method = func.id if isinstance(func, ast.Name) else None
        args = [self._arg(arg) for arg in node.args]
        return Call(receiver, method, args,
                    location=self._location(self._lparen_line(node)))

    def _arg(self, node):
        location = self._location(node.lineno)
        if isinstance(node, ast.Constant):
            token = ast.get_source_segment(self._source, node)
            if isinstance(node.value, str) and not has_comments(token):
                return String(token, location=location)
            if isinstance(node.value, int) and \
                    not isinstance(node.value, bool):
                return Number(node.value, location=location)
        elif isinstance(node, ast.Name):
            return Name(node.id, self._scope.lookup(node.id),
                        location=location)
        return Expression(ast.get_source_segment(self._source, node),
                          location=location)


def has_comments(token):
    """Implicitly concatenated literals may have comments between parts."""
    if '#' not in token:
        return False
    readline = io.StringIO('(' + token + ')').readline
    return any(tok.type == tokenize.COMMENT
               for tok in tokenize.generate_tokens(readline))


def parse(source, file_path='<string>', errors=None):
    errors = Errors() if errors is None else errors
    # same line endings as the ones ast recognizes
    source = io.StringIO(source, newline=None).read()
    try:
        tree = ast.parse(source, filename=file_path)
    except SyntaxError as e:
        location = Location(file_path, e.lineno)
        with errors.location(location):
            raise ParseError(location, e.msg)
    except ValueError as e:
        location = Location(file_path, None)
        with errors.location(location):
            raise ParseError(location, str(e))
    calls = CallSites.collect(source, file_path, tree)
    log.debug('%s: %d call sites', file_path, len(calls))
    return Module(file_path, calls, location=Location(file_path, None))


def parse_file(file_path, errors=None, encoding='utf-8'):
    try:
        with io.open(file_path, encoding=encoding) as f:
            source = f.read()
    except (IOError, UnicodeDecodeError) as e:
        location = Location(file_path, None)
        errors = Errors() if errors is None else errors
        with errors.location(location):
            raise ParseError(location, 'Can not read file: {}'.format(e))
    return parse(source, file_path, errors)


def parse_dir(dir_path, errors=None):
    """Parses every source file found at the directory level, nested
    directories are not entered.
    """
    try:
        file_names = sorted(os.listdir(dir_path))
    except OSError as e:
        raise ParseError(Location(dir_path, None),
                         'Can not list directory: {}'.format(e))
    modules = []
    for file_name in file_names:
        file_path = os.path.join(dir_path, file_name)
        if file_name.endswith(SOURCE_EXT) and os.path.isfile(file_path):
            modules.append(parse_file(file_path, errors))
    log.info('Parsed %d files in %s', len(modules), dir_path)
    return Package(dir_path, modules, location=Location(dir_path, None))


def parse_path(path, errors=None):
    if os.path.isdir(path):
        return parse_dir(path, errors)
    return parse_file(path, errors)
