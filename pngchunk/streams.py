import io
import logging

from .exceptions import TruncatedChunkException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around an in-memory buffer to
    uniform its properties: mainly we need a read() that never
    returns less than asked without telling us.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to stream from' % self.obj.__class__.__name__)

        init_method()

        self.length = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(0)

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__}, {self.tell()}/{self.length})>'

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

        return self

    def remaining(self) -> int:
        return self.length - self.tell()

    def at_end(self) -> bool:
        return self.remaining() <= 0

    def read_exactly(self, n: int) -> bytes:
        '''Read exactly n bytes or raise TruncatedChunkException without
        moving the cursor.'''
        offset = self.tell()
        if n < 0 or n > self.length - offset:
            logger.debug('asked %d bytes at offset 0x%08x but only %d are available', n, offset, self.remaining())
            raise TruncatedChunkException(
                f'need {n} bytes at offset {offset} but only {self.remaining()} are available')

        return self.obj.read(n)

