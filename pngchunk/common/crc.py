'''
CRC calculation for the chunks.
'''
from zlib import crc32


def calculate(*parts: bytes) -> int:
    """Standard CRC with pre and post conditioning, as defined by ISO 3309 or ITU-T V.42,
    i.e. the reflected CRC-32 with polynomial 0xedb88320 that zlib implements.

    The register starts at all ones, each byte is processed from the least significant
    bit and at the end the register is inverted. The value is stored in the file MSB first.

    The parts are processed as a single contiguous message, so

        calculate(b'IEND', b'') == calculate(b'IE', b'ND')

    See <https://www.w3.org/TR/PNG-Structure.html#CRC-algorithm>.
    """
    value = 0
    for part in parts:
        value = crc32(part, value)

    return value
