from contextlib import contextmanager
from collections import namedtuple


Error = namedtuple('Error', ['location', 'message', 'severity'])

WARNING = 1
ERROR = 2


class UserError(Exception):
    pass


class Errors(object):

    def __init__(self):
        self.list = []

    @contextmanager
    def location(self, location):
        try:
            yield
        except UserError as e:
            self.error(location, str(e))
            raise

    def warn(self, location, message):
        self.list.append(Error(location, message, WARNING))

    def error(self, location, message):
        self.list.append(Error(location, message, ERROR))

    @property
    def warnings(self):
        return [e for e in self.list if e.severity == WARNING]
