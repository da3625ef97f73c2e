"""
A Field is "fundamental" datatype from the format point of view: something with a fixed
encoding directly packable/unpackable from a stream.

Here fields are stateless codecs, the values live in the objects using them.
"""
import logging
import struct
from enum import Enum, auto

from .exceptions import FieldPackException, TruncatedChunkException


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()
    NETWORK       = auto()
    NATIVE        = auto()


_ENDIANESS_PREFIX = {
    Endianess.LITTLE_ENDIAN: '<',
    Endianess.BIG_ENDIAN: '>',
    Endianess.NETWORK: '!',
    Endianess.NATIVE: '=',
}


def _read(stream, n, name):
    try:
        return stream.read_exactly(n)
    except TruncatedChunkException as e:
        if name:
            e.chain.insert(0, name)
        raise


class Field(object):
    """Base class to subclass from"""

    def __init__(self, name=None):
        self.name = name

    @property
    def size(self) -> int:
        raise NotImplementedError(f"method {self.__class__.__name__}.size not implemented")

    def pack(self, value) -> bytes:
        raise NotImplementedError('you need to implement this in the subclass')

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, endianess=Endianess.LITTLE_ENDIAN, **kw):
        super().__init__(**kw)
        self.format = format
        self.endianess = endianess
        self._struct = struct.Struct(self.get_format())

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.get_format())

    def get_format(self):
        return '%s%s' % (_ENDIANESS_PREFIX[self.endianess], self.format)

    @property
    def size(self) -> int:
        return self._struct.size

    def pack(self, value) -> bytes:
        try:
            return self._struct.pack(value)
        except struct.error as e:
            logger.error(e)
            raise FieldPackException(f'can\'t pack {value!r} as {self.get_format()}: {e}',
                                     chain=[self.name] if self.name else []) from e

    def unpack(self, stream) -> int:
        return self._struct.unpack(_read(stream, self.size, self.name))[0]


class StringField(Field):
    """Represent a contiguous chunk of bytes of fixed length."""

    def __init__(self, n, **kw):
        super().__init__(**kw)
        self.length = n

    def __repr__(self):
        return '<%s(%d)>' % (self.__class__.__name__, self.length)

    def __len__(self):
        return self.length

    @property
    def size(self) -> int:
        return self.length

    def pack(self, value: bytes) -> bytes:
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        return bytes(value)

    def unpack(self, stream) -> bytes:
        return _read(stream, self.length, self.name)
