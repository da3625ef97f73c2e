'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

Here the file is seen only as a signature followed by a list of chunks, the
content of the chunks is not interpreted.
'''
import logging
from typing import Iterator, List, Optional, Tuple, Union

from . import fields
from .core import Chunk, ChunkType
from .enum import Compliant
from .exceptions import (
    ChunkNotFoundException,
    MagicException,
    MissingTrailerException,
    PngChunkException,
    TruncatedChunkException,
)
from .streams import Stream


logger = logging.getLogger(__name__)

ChunkTypeLike = Union[ChunkType, str, bytes]


class PNGHeader(object):
    '''The eight bytes every PNG file starts with.'''
    MAGIC = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

    magic = fields.StringField(len(MAGIC), name='magic')

    @classmethod
    def pack(cls) -> bytes:
        return cls.magic.pack(cls.MAGIC)

    @classmethod
    def unpack(cls, stream: Stream) -> bytes:
        try:
            value = cls.magic.unpack(stream)
        except TruncatedChunkException as e:
            raise MagicException(f'file too short for the signature: {e.message}', chain=['header']) from e

        if value != cls.MAGIC:
            logger.warning('the magic doesn\'t correspond: %r', value)
            raise MagicException(f'wrong signature {value!r}', chain=['header'])

        return value


class PNGFile(object):
    '''The whole file: header and chunks, in order.

    The order is meaningful and it's preserved, moreover more chunks can have
    the same type: lookup and removal act on the first one found.
    '''
    TRAILER = ChunkType(b'IEND')

    def __init__(self, chunks=None):
        self._chunks: List[Chunk] = list(chunks) if chunks is not None else []

    @classmethod
    def unpack(cls, stream: Stream, compliant: Compliant = Compliant.NONE) -> "PNGFile":
        '''Read the signature and then the chunks until the stream is exhausted.

        Any failing chunk aborts the parsing, the exception's chain
        indicates which one.'''
        PNGHeader.unpack(stream)

        chunks = []
        while not stream.at_end():
            logger.debug('unpacking chunk #%d', len(chunks))
            try:
                chunk = Chunk.unpack(stream)
            except PngChunkException as e:
                e.chain[:0] = ['chunks', len(chunks)]
                raise
            chunks.append(chunk)

        if compliant & Compliant.IEND and (not chunks or chunks[-1].type != cls.TRAILER):
            raise MissingTrailerException(f'the last chunk is not {cls.TRAILER}', chain=['chunks'])

        logger.debug('unpacked %d chunks', len(chunks))

        return cls(chunks)

    @classmethod
    def from_bytes(cls, data: bytes, compliant: Compliant = Compliant.NONE) -> "PNGFile":
        return cls.unpack(Stream(data), compliant=compliant)

    def pack(self) -> bytes:
        return PNGHeader.pack() + b''.join(chunk.pack() for chunk in self._chunks)

    @property
    def raw(self) -> bytes:
        return self.pack()

    @property
    def size(self) -> int:
        return PNGHeader.magic.size + sum(chunk.size for chunk in self._chunks)

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        return tuple(self._chunks)

    def append_chunk(self, chunk: Chunk) -> None:
        if self.chunk_by_type(chunk.type) is not None:
            logger.warning('a chunk of type %s is already present, lookups will return the first one', chunk.type)

        self._chunks.append(chunk)

    def _index_of(self, chunk_type: ChunkTypeLike) -> Optional[int]:
        chunk_type = ChunkType.coerce(chunk_type)
        for idx, chunk in enumerate(self._chunks):
            if chunk.type == chunk_type:
                return idx

        return None

    def chunk_by_type(self, chunk_type: ChunkTypeLike) -> Optional[Chunk]:
        idx = self._index_of(chunk_type)

        return self._chunks[idx] if idx is not None else None

    def chunks_by_type(self, chunk_type: ChunkTypeLike) -> List[Chunk]:
        chunk_type = ChunkType.coerce(chunk_type)

        return [chunk for chunk in self._chunks if chunk.type == chunk_type]

    def remove_chunk(self, chunk_type: ChunkTypeLike) -> Chunk:
        idx = self._index_of(chunk_type)

        if idx is None:
            raise ChunkNotFoundException(f'no chunk with type {chunk_type}', chain=['chunks'])

        chunk = self._chunks.pop(idx)
        logger.debug('removed chunk #%d %r', idx, chunk)

        return chunk

    def __len__(self):
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __eq__(self, other):
        if not isinstance(other, PNGFile):
            return NotImplemented

        return self._chunks == other._chunks

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(repr(_) for _ in self._chunks))

    def __str__(self):
        msg = f'PNG file with {len(self._chunks)} chunks:\n'
        for idx, chunk in enumerate(self._chunks):
            msg += f'[{idx:02d}] {chunk}'

        return msg
