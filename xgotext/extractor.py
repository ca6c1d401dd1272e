import os
import ast
import logging
from collections import namedtuple

from .nodes import NodeVisitor, Name
from .errors import UserError, Errors
from .signatures import SIGNATURES


log = logging.getLogger(__name__)

DEFAULT_DOMAIN = 'default'


Message = namedtuple('Message', [
    'domain',
    'msgid',
    'msgid_plural',
    'context',
    'location',
    'label',
])


class DomainError(UserError):

    def __init__(self, location, message):
        self.location = location
        self.message = message
        super(DomainError, self).__init__(location, message)

    def __str__(self):
        return '{}: {}'.format(self.location, self.message)


def is_domain_name(name):
    """Domain names become file names, so they can't point outside of the
    output directory.
    """
    if not name or name in ('.', '..') or '\0' in name:
        return False
    separators = {'/', '\\', os.sep, os.altsep} - {None}
    return not any(sep in name for sep in separators)


def unquote_domain(token, location):
    try:
        # implicitly concatenated literals may span several lines
        value = ast.literal_eval('({})'.format(token))
    except (ValueError, SyntaxError) as e:
        raise DomainError(location, 'Can not unquote domain {}: {}'
                          .format(token, e))
    if not isinstance(value, str) or not is_domain_name(value):
        raise DomainError(location, 'Invalid domain name {}'.format(token))
    return value


class StringToken(NodeVisitor):

    def visit_string(self, node):
        return node.token


class Countable(NodeVisitor):

    def visit_number(self, node):
        return True

    def visit_name(self, node):
        return node.kind == Name.VAR


_string_token = StringToken()
_countable = Countable()


class Extractor(NodeVisitor):
    """Matches call sites against the known translation calls and
    collects messages in discovery order.

    Call sites with an unknown method name are ignored. Call sites which
    have a known method name but non-literal arguments are skipped
    silently, a warning is recorded in `errors` for each of them.
    """

    def __init__(self, domain=DEFAULT_DOMAIN, errors=None):
        self.domain = domain
        self.errors = Errors() if errors is None else errors
        self._messages = []

    @classmethod
    def extract(cls, node, domain=DEFAULT_DOMAIN, errors=None):
        self = cls(domain, errors)
        self.visit(node)
        return self._messages

    def visit_call(self, node):
        message = self.match(node)
        if message is not None:
            self._messages.append(message)

    def _skip(self, node, reason):
        log.debug('%s: skipping %s: %s', node.location, node.label, reason)
        self.errors.warn(node.location, '{} skipped, {}'
                         .format(node.label, reason))

    def match(self, node):
        if node.receiver is None:
            return None
        signature = SIGNATURES.get(node.method)
        if signature is None:
            return None

        if len(node.args) < signature.min_args:
            self._skip(node, 'expected at least {} arguments'
                       .format(signature.min_args))
            return None

        tokens = {}
        for pos in signature.strings:
            token = _string_token.visit(node.args[pos])
            if token is None:
                self._skip(node, 'argument {} is not a string literal'
                           .format(pos + 1))
                return None
            tokens[pos] = token

        if signature.count is not None and \
                not _countable.visit(node.args[signature.count]):
            self._skip(node, 'argument {} is not an integer literal or '
                       'a variable'.format(signature.count + 1))
            return None

        if signature.domain is None:
            domain = self.domain
        else:
            with self.errors.location(node.location):
                domain = unquote_domain(tokens[signature.domain],
                                        node.location)

        return Message(
            domain=domain,
            msgid=tokens[signature.msgid],
            msgid_plural=tokens.get(signature.msgid_plural),
            context=tokens.get(signature.context),
            location=node.location,
            label=node.label,
        )
