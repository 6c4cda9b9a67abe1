"""
Fixtures that write in-memory BMP files to disk for the decoder tests
"""
import pytest

from bmp_builder import build_bmp


@pytest.fixture
def bmp_file(tmp_path):
    """Factory fixture: write build_bmp(...) output to a file and return its path."""
    counter = iter(range(1000))

    def _write(*args, **kwargs):
        path = tmp_path / f"image{next(counter)}.bmp"
        path.write_bytes(build_bmp(*args, **kwargs))
        return path

    return _write


@pytest.fixture
def raw_file(tmp_path):
    """Factory fixture: write arbitrary bytes to a file and return its path."""
    counter = iter(range(1000))

    def _write(data):
        path = tmp_path / f"raw{next(counter)}.bin"
        path.write_bytes(data)
        return path

    return _write
