from collections import namedtuple


_Location = namedtuple('Location', 'file line')


class Location(_Location):

    def __str__(self):
        if self.line is None:
            return self.file
        return '{}:{}'.format(self.file, self.line)


_undefined = object()


class Node(object):
    location = None

    def __init__(self, location=_undefined):
        if location is not _undefined:
            self.location = location

    def accept(self, visitor):
        raise NotImplementedError


class String(Node):
    """String literal, `token` is kept exactly as written in the source,
    quotes and escapes included.
    """

    def __init__(self, token, **kw):
        self.token = token
        super(String, self).__init__(**kw)

    def __repr__(self):
        return self.token

    def accept(self, visitor):
        return visitor.visit_string(self)


class Number(Node):

    def __init__(self, value, **kw):
        self.value = value
        super(Number, self).__init__(**kw)

    def __repr__(self):
        return repr(self.value)

    def accept(self, visitor):
        return visitor.visit_number(self)


class Name(Node):
    VAR = 'var'
    FUNC = 'func'
    CLASS = 'class'
    IMPORT = 'import'

    def __init__(self, name, kind=None, **kw):
        self.name = name
        self.kind = kind
        super(Name, self).__init__(**kw)

    def __repr__(self):
        return self.name

    def accept(self, visitor):
        return visitor.visit_name(self)


class Expression(Node):
    """Any other expression, its shape is irrelevant for extraction."""

    def __init__(self, source=None, **kw):
        self.source = source
        super(Expression, self).__init__(**kw)

    def __repr__(self):
        return self.source or '<expr>'

    def accept(self, visitor):
        return visitor.visit_expression(self)


class Call(Node):
    """Call expression, `receiver` is None when the callee is not an
    attribute selector (`receiver.method(...)`).
    """

    def __init__(self, receiver, method, args, **kw):
        self.receiver = receiver
        self.method = method
        self.args = tuple(args)
        super(Call, self).__init__(**kw)

    @property
    def label(self):
        return '{}.{}'.format(self.receiver, self.method)

    def __repr__(self):
        return '{}({})'.format(self.label if self.receiver else self.method,
                               ', '.join(map(repr, self.args)))

    def accept(self, visitor):
        return visitor.visit_call(self)


class Module(Node):

    def __init__(self, file_path, calls, **kw):
        self.file_path = file_path
        self.calls = tuple(calls)
        super(Module, self).__init__(**kw)

    def __repr__(self):
        return '<module {}>'.format(self.file_path)

    def accept(self, visitor):
        return visitor.visit_module(self)


class Package(Node):

    def __init__(self, path, modules, **kw):
        self.path = path
        self.modules = tuple(modules)
        super(Package, self).__init__(**kw)

    def __repr__(self):
        return '<package {}>'.format(self.path)

    def accept(self, visitor):
        return visitor.visit_package(self)


class NodeVisitor(object):

    def visit(self, node):
        return node.accept(self)

    def visit_package(self, node):
        for module in node.modules:
            self.visit(module)

    def visit_module(self, node):
        for call in node.calls:
            self.visit(call)

    def visit_call(self, node):
        pass

    def visit_string(self, node):
        pass

    def visit_number(self, node):
        pass

    def visit_name(self, node):
        pass

    def visit_expression(self, node):
        pass
