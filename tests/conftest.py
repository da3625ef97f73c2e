import io

import pytest
from PIL import Image
from PIL.PngImagePlugin import PngInfo


@pytest.fixture
def png_bytes():
    """A real 5x5 red image, with a text chunk so that there are more than
    the bare minimum chunks."""
    info = PngInfo()
    info.add_text('Comment', 'red square')

    image = Image.new('RGB', (5, 5), 'red')
    buffer = io.BytesIO()
    image.save(buffer, 'PNG', pnginfo=info)

    return buffer.getvalue()


@pytest.fixture
def png_path(tmp_path, png_bytes):
    path = tmp_path / 'red.png'
    path.write_bytes(png_bytes)

    return path
