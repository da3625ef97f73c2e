'''
Commands to hide, read and remove messages inside PNG files.

They are thin: read the file, call the core and write back the result.
'''
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core import Chunk, ChunkType
from .exceptions import PngChunkException
from .png import PNGFile


logger = logging.getLogger(__name__)


def _load(path) -> PNGFile:
    data = Path(path).read_bytes()
    logger.debug('read %d bytes from \'%s\'', len(data), path)

    return PNGFile.from_bytes(data)


def _save(png: PNGFile, path) -> None:
    data = png.pack()
    Path(path).write_bytes(data)
    logger.debug('written %d bytes to \'%s\'', len(data), path)


def encode(path, chunk_type: str, message: str, output=None) -> Chunk:
    png = _load(path)
    chunk = Chunk(ChunkType.from_string(chunk_type), message.encode('utf-8'))
    png.append_chunk(chunk)

    _save(png, output if output is not None else path)

    return chunk


def decode(path, chunk_type: str) -> Optional[str]:
    png = _load(path)
    chunk = png.chunk_by_type(ChunkType.from_string(chunk_type))

    return chunk.data_as_text() if chunk is not None else None


def remove(path, chunk_type: str) -> Chunk:
    png = _load(path)
    chunk = png.remove_chunk(ChunkType.from_string(chunk_type))

    _save(png, path)

    return chunk


def print_chunks(path) -> str:
    return str(_load(path))


def usage(progname):
    print(f'''usage: {progname} <command> <arguments>

 {progname} encode <png file path> <chunk type> <message> [output path]
 {progname} decode <png file path> <chunk type>
 {progname} remove <png file path> <chunk type>
 {progname} print <png file path>''', file=sys.stderr)

    return 2


def main(argv: List[str]) -> int:
    progname = argv[0] if argv else 'pngmsg'
    args = argv[1:]

    if not args:
        return usage(progname)

    command, args = args[0], args[1:]

    # (minimum, maximum) number of arguments
    arity = {
        'encode': (3, 4),
        'decode': (2, 2),
        'remove': (2, 2),
        'print': (1, 1),
    }

    if command not in arity or not arity[command][0] <= len(args) <= arity[command][1]:
        return usage(progname)

    try:
        if command == 'encode':
            chunk = encode(*args)
            print(f'Hidden message in chunk "{chunk.type}" ({chunk.length} bytes)')
        elif command == 'decode':
            path, chunk_type = args
            message = decode(path, chunk_type)
            if message is None:
                print(f'No chunk found with type "{chunk_type}"')
            else:
                print(f'Found hidden message: "{message}" in chunk "{chunk_type}"')
        elif command == 'remove':
            path, chunk_type = args
            chunk = remove(path, chunk_type)
            print(f'Removed chunk "{chunk.type}" ({chunk.length} bytes)')
        else:
            print(print_chunks(*args), end='')
    except (PngChunkException, OSError) as e:
        logger.debug('command \'%s\' failed', command, exc_info=True)
        print(f'{progname}: {command}: {e}', file=sys.stderr)
        return 1

    return 0
