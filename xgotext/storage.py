import io
import os.path

from .errors import UserError


class CatalogError(UserError):
    pass


class StorageBase(object):

    def open(self, name):
        """Returns a new writable text stream for the catalog `name`,
        discarding any previous content.
        """
        raise NotImplementedError


class _MemoryFile(io.StringIO):

    def __init__(self, storage, name):
        self._storage = storage
        self._name = name
        super(_MemoryFile, self).__init__()

    def close(self):
        if not self.closed:
            self._storage.files[self._name] = self.getvalue()
        super(_MemoryFile, self).close()


class DictStorage(StorageBase):

    def __init__(self):
        self.files = {}
        self._open = {}

    def open(self, name):
        stream = self._open[name] = _MemoryFile(self, name)
        self.files[name] = ''
        return stream

    def get(self, name):
        stream = self._open.get(name)
        if stream is not None and not stream.closed:
            return stream.getvalue()
        return self.files[name]


class FileSystemStorage(StorageBase):
    _encoding = 'utf-8'
    _template = '{}.po'

    def __init__(self, path):
        self._path = path

    def file_path(self, name):
        return os.path.join(self._path, self._template.format(name))

    def open(self, name):
        file_path = self.file_path(name)
        try:
            return io.open(file_path, 'w', encoding=self._encoding,
                           newline='\n')
        except (IOError, OSError) as e:
            raise CatalogError('Can not open {}: {}'
                               .format(file_path, e.strerror or e))
