import io
import logging

from .enum import DxfVersion
from .exceptions import TagStreamException, EndOfStream


logger = logging.getLogger(__name__)


class Tag(object):
    '''A (group code, value) pair, i.e. two lines of the stream.'''
    __slots__ = ('code', 'value')

    def __init__(self, code, value):
        self.code = code
        self.value = value

    def __iter__(self):
        return iter((self.code, self.value))

    def __eq__(self, other):
        if isinstance(other, Tag):
            return (self.code, self.value) == (other.code, other.value)
        if isinstance(other, tuple):
            return (self.code, self.value) == other
        return NotImplemented

    def __repr__(self):
        return '<%s(%d, %r)>' % (self.__class__.__name__, self.code, self.value)


class Stream(object):
    '''This is a simple wrapper around path/bytes/file objects to
    uniform their properties: mainly we need readline() and write()
    working with text, whatever the underlying object is.'''
    def __init__(self, obj, flags='r', encoding='utf-8'):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.flags = flags
        self.encoding = encoding
        self.obj = obj
        self._owned = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            if not hasattr(self.obj, 'readline') and not hasattr(self.obj, 'write'):
                raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)
            logger.debug('using \'%s\' as it is', self._type.__name__)
        else:
            init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __del__(self):
        obj = self.__dict__.get('obj')
        if self.__dict__.get('_owned') and obj is not None:
            obj.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb' if 'r' in self.flags else 'wb')
        self._owned = True

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    @property
    def is_text(self):
        return isinstance(self.obj, io.TextIOBase)

    def readline(self):
        line = self.obj.readline()
        if isinstance(line, bytes):
            line = line.decode(self.encoding, errors='replace')
        return line

    def write(self, data):
        if not self.is_text:
            data = data.encode(self.encoding)
        return self.obj.write(data)

    def getvalue(self):
        return self.obj.getvalue()


class TagStream(object):
    '''Reads and writes tags, one at a time.

    It keeps the count of the lines read (for diagnostics) and the format version
    the records are decoded from/encoded for.'''

    def __init__(self, obj=None, version=DxfVersion.AC1015, flags='r', encoding='utf-8'):
        self.stream = obj if isinstance(obj, Stream) else Stream(obj if obj is not None else b'', flags=flags, encoding=encoding)
        self.version = DxfVersion(version)
        self.line_number = 0
        self._pending = []

    def __repr__(self):
        return '<%s(version=%s, line=%d)>' % (self.__class__.__name__, self.version.name, self.line_number)

    def __iter__(self):
        while True:
            try:
                yield self.next_tag()
            except EndOfStream:
                return

    def _readline(self):
        try:
            line = self.stream.readline()
        except (OSError, ValueError) as e:
            raise TagStreamException(f'while reading: {e}', line=self.line_number) from e

        if line == '':
            return None

        self.line_number += 1

        return line.rstrip('\r\n')

    def next_tag(self):
        '''Consume the group code line and its value line.

        It raises EndOfStream when there is nothing more to read and
        TagStreamException if the pair is broken.'''
        if self._pending:
            return self._pending.pop()

        code_line = self._readline()
        if code_line is None:
            raise EndOfStream('no more tags', line=self.line_number)

        try:
            code = int(code_line.strip())
        except ValueError:
            raise TagStreamException(f'group code expected, found {code_line!r}', line=self.line_number)

        value = self._readline()
        if value is None:
            raise TagStreamException(f'missing value for group code {code}', line=self.line_number)

        logger.debug('line %d: tag (%d, %r)', self.line_number, code, value)

        return Tag(code, value)

    def push_back(self, tag):
        '''The next call to next_tag() will return this tag again.'''
        self._pending.append(tag)

    def peek_tag(self):
        tag = self.next_tag()
        self.push_back(tag)
        return tag

    def write_tag(self, code, value):
        try:
            self.stream.write('%3d\n%s\n' % (code, value))
        except (OSError, ValueError) as e:
            raise TagStreamException(f'while writing group code {code}: {e}') from e

    def write_tags(self, tags):
        for code, value in tags:
            self.write_tag(code, value)

    def getvalue(self):
        return self.stream.getvalue()
