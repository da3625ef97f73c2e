import pytest

from pngchunk import commands
from pngchunk.core import Chunk
from pngchunk.exceptions import ChunkNotFoundException, ChunkTypeException
from pngchunk.png import PNGFile


def test_encode_decode(png_path):
    chunk = commands.encode(png_path, 'ruSt', 'this is a secret')

    assert chunk.data == b'this is a secret'
    assert commands.decode(png_path, 'ruSt') == 'this is a secret'

    png = PNGFile.from_bytes(png_path.read_bytes())
    assert str(png.chunks[-1].type) == 'ruSt'


def test_encode_to_other_file(png_path, png_bytes, tmp_path):
    output = tmp_path / 'secret.png'

    commands.encode(png_path, 'ruSt', 'ciao', output=output)

    assert png_path.read_bytes() == png_bytes
    assert commands.decode(output, 'ruSt') == 'ciao'


def test_decode_missing(png_path):
    assert commands.decode(png_path, 'ruSt') is None


def test_remove(png_path, png_bytes):
    commands.encode(png_path, 'ruSt', 'this is a secret')

    chunk = commands.remove(png_path, 'ruSt')

    assert chunk.data_as_text() == 'this is a secret'
    assert png_path.read_bytes() == png_bytes


def test_remove_missing(png_path, png_bytes):
    with pytest.raises(ChunkNotFoundException):
        commands.remove(png_path, 'ruSt')

    assert png_path.read_bytes() == png_bytes


def test_invalid_chunk_type(png_path):
    with pytest.raises(ChunkTypeException):
        commands.encode(png_path, 'ru5t', 'nope')


def test_print_chunks(png_path):
    text = commands.print_chunks(png_path)

    assert 'Type: IHDR' in text
    assert 'Type: IEND' in text


def test_main_roundtrip(png_path, capsys):
    assert commands.main(['pngmsg', 'encode', str(png_path), 'ruSt', 'hello']) == 0
    assert 'ruSt' in capsys.readouterr().out

    assert commands.main(['pngmsg', 'decode', str(png_path), 'ruSt']) == 0
    assert capsys.readouterr().out == 'Found hidden message: "hello" in chunk "ruSt"\n'

    assert commands.main(['pngmsg', 'print', str(png_path)]) == 0
    assert 'Type: ruSt' in capsys.readouterr().out

    assert commands.main(['pngmsg', 'remove', str(png_path), 'ruSt']) == 0
    assert 'Removed chunk "ruSt"' in capsys.readouterr().out

    assert commands.main(['pngmsg', 'decode', str(png_path), 'ruSt']) == 0
    assert capsys.readouterr().out == 'No chunk found with type "ruSt"\n'


@pytest.mark.parametrize('argv', [
    ['pngmsg'],
    ['pngmsg', 'hide'],
    ['pngmsg', 'decode', 'file.png'],
    ['pngmsg', 'print'],
    ['pngmsg', 'encode', 'file.png', 'ruSt'],
])
def test_main_usage(argv, capsys):
    assert commands.main(argv) == 2
    assert 'usage:' in capsys.readouterr().err


def test_main_errors(png_path, tmp_path, capsys):
    assert commands.main(['pngmsg', 'remove', str(png_path), 'ruSt']) == 1
    assert 'no chunk with type ruSt' in capsys.readouterr().err

    assert commands.main(['pngmsg', 'decode', str(png_path), 'Ru1t']) == 1
    assert capsys.readouterr().err

    assert commands.main(['pngmsg', 'print', str(tmp_path / 'missing.png')]) == 1
    assert capsys.readouterr().err

    not_png = tmp_path / 'not.png'
    not_png.write_bytes(b'GIF89a' + b'\x00' * 20)
    assert commands.main(['pngmsg', 'print', str(not_png)]) == 1
    assert 'wrong signature' in capsys.readouterr().err


def test_main_binary_payload(png_path, capsys):
    png = PNGFile.from_bytes(png_path.read_bytes())
    png.append_chunk(Chunk('ruSt', b'\xff\xfe'))
    png_path.write_bytes(png.pack())

    assert commands.main(['pngmsg', 'decode', str(png_path), 'ruSt']) == 1
    assert 'UTF-8' in capsys.readouterr().err
