from collections import namedtuple


_Signature = namedtuple('Signature', [
    'name',
    'min_args',
    'strings',
    'domain',
    'count',
    'context',
    'msgid',
    'msgid_plural',
])


class Signature(_Signature):
    """Layout of a translation call.

    All positions are 0-based and refer to the positional arguments of the
    call. `domain`, `count`, `context` and `msgid_plural` are None when the
    variant has no such argument; a None `domain` means the current domain
    is used.
    """

    @property
    def is_plural(self):
        return self.msgid_plural is not None


SIGNATURES = {s.name: s for s in [
    Signature('Get', 1, (0,), None, None, None, 0, None),
    Signature('GetN', 3, (0, 1), None, 2, None, 0, 1),
    Signature('GetD', 2, (0, 1), 0, None, None, 1, None),
    # domain is the only extra argument, so the count is never inspected
    Signature('GetND', 3, (0, 1, 2), 0, None, None, 1, 2),
    Signature('GetC', 2, (0, 1), None, None, 1, 0, None),
    Signature('GetNC', 4, (0, 1, 3), None, 2, 3, 0, 1),
    Signature('GetDC', 3, (0, 1, 2), 0, None, 2, 1, None),
    Signature('GetNDC', 5, (0, 1, 2, 4), 0, 3, 4, 1, 2),
]}
