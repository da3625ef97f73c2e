"""
Core module: the chunk type and the chunk record.

A chunk is the main data structure of the format: the 4 fields represent
a record into the file and the integers are intended big-endian.

    .--------------.------------.----------------.-------------.
    | length (u32) | type (4)   | data (length)  | crc (u32)   |
    '--------------'------------'----------------'-------------'

The crc is computed over the type and the data, but not the length.
"""
import logging
from typing import Union

from bitstring import Bits

from . import fields
from .common import crc
from .enum import ChunkProperty
from .exceptions import (
    ChunkDataException,
    ChunkDecodingException,
    ChunkTypeException,
    CRCMismatchException,
    PngChunkException,
    TextDecodeException,
)
from .fields import Endianess
from .streams import Stream


logger = logging.getLogger(__name__)

# bit 5 (0x20) of each letter is its case bit, counting from the MSB it's the third one
_CASE_BIT = 2


class ChunkType(object):
    '''The four letters identifying a chunk.

    The case of each letter encodes a property of the chunk

     1. ancillary bit: uppercase means critical
     2. private bit: uppercase means public
     3. reserved bit: must be uppercase in the current revision of the format
     4. safe-to-copy bit: lowercase means that editors not knowing
        the chunk can copy it anyway
    '''
    __slots__ = ('_code', '_bits')

    def __init__(self, code: bytes):
        if not isinstance(code, bytes):
            raise ChunkTypeException(f'chunk type must be bytes, not {code.__class__.__name__}')

        if len(code) != 4:
            raise ChunkTypeException(f'can\'t create chunk type with size {len(code)} (expected 4)')

        if not code.isalpha():
            raise ChunkTypeException(f'can\'t create chunk type with invalid data {code!r}')

        self._code = code
        self._bits = Bits(code)

    @classmethod
    def from_bytes(cls, value) -> "ChunkType":
        if isinstance(value, (str, int)):
            raise ChunkTypeException(f'can\'t create chunk type from {value.__class__.__name__}')

        try:
            code = bytes(value)
        except (TypeError, ValueError) as e:
            raise ChunkTypeException(f'can\'t create chunk type from {value!r}') from e

        return cls(code)

    @classmethod
    def from_string(cls, value: str) -> "ChunkType":
        if not isinstance(value, str):
            raise ChunkTypeException(f'can\'t create chunk type from {value.__class__.__name__}, expected str')

        if len(value) != 4:
            raise ChunkTypeException(f'can\'t create chunk type with size {len(value)} (expected 4)')

        try:
            code = value.encode('ascii')
        except UnicodeEncodeError as e:
            raise ChunkTypeException(f'can\'t create chunk type with invalid data {value!r}') from e

        return cls.from_bytes(code)

    @classmethod
    def coerce(cls, value: Union["ChunkType", str, bytes]) -> "ChunkType":
        '''Accept whatever the user is likely to pass as chunk type.'''
        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            return cls.from_string(value)

        return cls.from_bytes(value)

    @property
    def raw(self) -> bytes:
        return self._code

    def _is_lowercase(self, index: int) -> bool:
        return self._bits[8 * index + _CASE_BIT]

    def is_critical(self) -> bool:
        return not self._is_lowercase(0)

    def is_public(self) -> bool:
        return not self._is_lowercase(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._is_lowercase(2)

    def is_safe_to_copy(self) -> bool:
        return self._is_lowercase(3)

    def is_valid(self) -> bool:
        '''The letters are checked at construction, so here only the reserved bit matters.'''
        return self.is_reserved_bit_valid()

    @property
    def properties(self) -> ChunkProperty:
        value = ChunkProperty.NONE
        checks = (
            (self.is_critical, ChunkProperty.CRITICAL),
            (self.is_public, ChunkProperty.PUBLIC),
            (self.is_reserved_bit_valid, ChunkProperty.RESERVED_VALID),
            (self.is_safe_to_copy, ChunkProperty.SAFE_TO_COPY),
        )
        for check, flag in checks:
            if check():
                value |= flag

        return value

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._code == other._code

    def __hash__(self):
        return hash(self._code)

    def __bytes__(self):
        return self._code

    def __str__(self):
        return self._code.decode('ascii')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'


class Chunk(object):
    """A single record of the file.

    The checksum is not stored: it's calculated from type and data every time
    it's requested so it can't get out of sync with them.
    """
    length_field = fields.StructField('I', endianess=Endianess.BIG_ENDIAN, name='length')
    type_field   = fields.StringField(4, name='type')
    crc_field    = fields.StructField('I', endianess=Endianess.NETWORK, name='crc')

    def __init__(self, type: Union[ChunkType, str, bytes], data: bytes = b''):
        self._type = ChunkType.coerce(type)

        # bytes(5) would be five NUL bytes
        if isinstance(data, (str, int)):
            raise ChunkDataException(f'chunk data must be bytes-like, not {data.__class__.__name__}')

        try:
            self._data = bytes(data)
        except (TypeError, ValueError) as e:
            raise ChunkDataException(f'chunk data must be bytes-like, not {data.__class__.__name__}') from e

    @property
    def type(self) -> ChunkType:
        return self._type

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def size(self) -> int:
        '''Number of bytes of the packed chunk'''
        return self.length_field.size + self.type_field.size + self.length + self.crc_field.size

    def checksum(self) -> int:
        return crc.calculate(self._type.raw, self._data)

    def data_as_text(self) -> str:
        try:
            return self._data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise TextDecodeException(f'data of chunk {self._type} is not valid UTF-8: {e}', chain=['data']) from e

    def pack(self) -> bytes:
        return b''.join([
            self.length_field.pack(self.length),
            self.type_field.pack(self._type.raw),
            self._data,
            self.crc_field.pack(self.checksum()),
        ])

    @property
    def raw(self) -> bytes:
        return self.pack()

    @classmethod
    def unpack(cls, stream: Stream) -> "Chunk":
        '''Read a chunk from the actual position of the stream.

        If something goes wrong the stream is moved back where it was.'''
        offset = stream.tell()
        logger.debug('unpacking chunk at offset 0x%08x', offset)

        try:
            length = cls.length_field.unpack(stream)
            code = cls.type_field.unpack(stream)
            try:
                chunk_type = ChunkType(code)
            except ChunkTypeException as e:
                raise ChunkDecodingException(f'invalid chunk type {code!r}', chain=['type']) from e

            try:
                data = stream.read_exactly(length)
            except PngChunkException as e:
                e.chain.insert(0, 'data')
                raise

            stored = cls.crc_field.unpack(stream)
        except PngChunkException:
            stream.seek(offset)
            raise

        chunk = cls(chunk_type, data)
        expected = chunk.checksum()
        if stored != expected:
            stream.seek(offset)
            logger.debug('chunk %s at offset 0x%08x has a wrong CRC', chunk_type, offset)
            raise CRCMismatchException(stored, expected, chain=['crc'])

        logger.debug('unpacked %r', chunk)

        return chunk

    @classmethod
    def from_bytes(cls, data: bytes) -> "Chunk":
        return cls.unpack(Stream(data))

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented

        return (self._type, self._data) == (other._type, other._data)

    def __repr__(self):
        return '<%s(type=%s,length=%d,crc=0x%08x)>' % (
            self.__class__.__name__,
            self._type,
            self.length,
            self.checksum(),
        )

    def __str__(self):
        return (
            'Chunk {\n'
            f'  Length: {self.length}\n'
            f'  Type: {self._type}\n'
            f'  Data: {self.length} bytes\n'
            f'  Crc: {self.checksum()}\n'
            '}\n'
        )
