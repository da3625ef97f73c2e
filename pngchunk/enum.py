from enum import Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format
    beyond the signature and the single chunks, that are always checked.'''
    NONE = 0
    IEND = 1 << 0


class ChunkProperty(Flag):
    '''The four properties encoded by the case of the chunk type letters.'''
    NONE          = 0
    CRITICAL      = 1 << 0
    PUBLIC        = 1 << 1
    RESERVED_VALID = 1 << 2
    SAFE_TO_COPY  = 1 << 3
