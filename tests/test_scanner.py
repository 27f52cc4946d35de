# tests/test_scanner.py

import pytest

from conftest import make_image
from imgsearch.errors import DirectoryNotFound
from imgsearch.indexing.scanner import ImageScanner, get_image_files, is_image_file


@pytest.mark.parametrize(
    "name,expected",
    [
        ("photo.jpg", True),
        ("photo.JPEG", True),
        ("scan.Png", True),
        ("icon.bmp", True),
        ("anim.gif", True),
        ("modern.webp", True),
        ("notes.txt", False),
        ("archive.tar.gz", False),
        ("jpg", False),
    ],
)
def test_is_image_file(name, expected):
    assert is_image_file(name) is expected


def test_scan_filters_extensions_and_is_not_recursive(tmp_path):
    make_image(tmp_path / "a.jpg")
    make_image(tmp_path / "b.PNG")
    (tmp_path / "readme.txt").write_text("not an image")
    nested = tmp_path / "nested"
    nested.mkdir()
    make_image(nested / "c.jpg")
    (tmp_path / "folder.jpg").mkdir()

    found = ImageScanner(tmp_path).scan()

    assert sorted(path.name for path in found) == ["a.jpg", "b.PNG"]
    assert all(path.parent == tmp_path for path in found)


def test_scan_empty_folder(tmp_path):
    assert get_image_files(tmp_path) == []


def test_missing_folder_raises_directory_not_found(tmp_path):
    missing = tmp_path / "does-not-exist"

    with pytest.raises(DirectoryNotFound) as excinfo:
        get_image_files(missing)

    assert excinfo.value.directory == missing
    assert str(missing) in str(excinfo.value)
    assert "mkdir" in excinfo.value.hint
