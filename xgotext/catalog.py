import logging


log = logging.getLogger(__name__)


HEADER = (
    'msgid ""\n'
    'msgstr ""\n'
    '"Plural-Forms: nplurals=2; plural=(n != 1);\\n"\n'
    '"MIME-Version: 1.0\\n"\n'
    '"Content-Type: text/plain; charset=UTF-8\\n"\n'
    '"Content-Transfer-Encoding: 8bit\\n"\n'
    '"Language: \\n"\n'
    '"X-Generator: xgotext\\n"\n'
)


class Catalog(object):

    def __init__(self, name, stream):
        self.name = name
        self.stream = stream
        self.header_written = False

    def write_header(self):
        if not self.header_written:
            self.stream.write(HEADER)
            self.header_written = True


class Catalogs(object):
    """Open catalog per domain.

    Catalogs are created on first use, the header is written right away,
    so a resolved catalog always has it even without entries. Use as a
    context manager to have every stream closed on exit.
    """

    def __init__(self, storage):
        self._storage = storage
        self._catalogs = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def domains(self):
        return list(self._catalogs)

    def resolve(self, name):
        try:
            return self._catalogs[name].stream
        except KeyError:
            pass
        catalog = Catalog(name, self._storage.open(name))
        self._catalogs[name] = catalog
        catalog.write_header()
        log.info('Created catalog for domain %r', name)
        return catalog.stream

    def close(self):
        for catalog in self._catalogs.values():
            if not catalog.stream.closed:
                catalog.stream.close()


def format_message(message):
    lines = [
        '',
        '#: {}'.format(message.location),
        '#. {}'.format(message.label),
    ]
    if message.context is not None:
        lines.append('msgctxt ' + message.context)
    lines.append('msgid ' + message.msgid)
    if message.msgid_plural is not None:
        lines.extend([
            'msgid_plural ' + message.msgid_plural,
            'msgstr[0] ""',
            'msgstr[1] ""',
        ])
    else:
        lines.append('msgstr ""')
    return '\n'.join(lines) + '\n'


def write_message(catalogs, message):
    catalogs.resolve(message.domain).write(format_message(message))


def write_messages(catalogs, messages):
    count = 0
    for message in messages:
        write_message(catalogs, message)
        count += 1
    return count
