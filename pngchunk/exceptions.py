class PngChunkException(Exception):
    '''Base class to extend in order to throw exception in pngchunk.

    It takes a message and optionally the chain of the layers that
    caused the exception (e.g. ['chunks', 3, 'crc']).
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        return '%s (at %s)' % (self.message, '.'.join(str(_) for _ in self.chain))


class ChunkTypeException(PngChunkException):
    '''The chunk type is not made of exactly four ASCII letters.'''
    pass


class ChunkDecodingException(PngChunkException):
    pass


class CRCMismatchException(ChunkDecodingException):

    def __init__(self, received, expected, chain=None):
        self.received = received
        self.expected = expected
        super().__init__(
            f'CRC mismatch (received 0x{received:08x}, expected 0x{expected:08x})',
            chain=chain,
        )


class FormatException(PngChunkException):
    pass


class MagicException(FormatException):
    pass


class TruncatedChunkException(ChunkDecodingException, FormatException):
    '''This is raised when the framing asks for more bytes than the
    buffer contains: it's not possible to go on parsing.'''
    pass


class MissingTrailerException(FormatException):
    pass


class ChunkNotFoundException(PngChunkException):
    pass


class TextDecodeException(PngChunkException):
    pass


class ChunkDataException(PngChunkException, TypeError):
    '''The data of a chunk must be a bytes-like object.'''
    pass


class FieldPackException(PngChunkException, ValueError):
    '''The value doesn't fit the binary encoding of the field
    (e.g. a chunk with more than 2^32 - 1 bytes of data).'''
    pass
