import asyncio
import io
import os

from fastapi import UploadFile

from app.utils.file_upload import UploadStore, has_upload, get_file_extension


def upload(name, content=b"data"):
    return UploadFile(file=io.BytesIO(content), filename=name)


def test_save_writes_timestamp_named_file(tmp_path):
    store = UploadStore(str(tmp_path / "uploads"))

    path = asyncio.run(store.save(upload("photo.JPG", b"abc")))

    name = os.path.basename(path)
    assert name.endswith(".JPG")
    assert name[:-4].isdigit()
    with open(store.local_path(path), "rb") as f:
        assert f.read() == b"abc"


def test_save_never_overwrites(tmp_path):
    store = UploadStore(str(tmp_path))

    first = asyncio.run(store.save(upload("a.png", b"1")))
    second = asyncio.run(store.save(upload("b.png", b"2")))

    assert first != second
    assert len(os.listdir(tmp_path)) == 2


def test_stored_path_is_public_whatever_the_directory(tmp_path):
    store = UploadStore(str(tmp_path / "srv" / "fly" / "images"))

    path = asyncio.run(store.save(upload("a.png")))

    assert path.startswith("uploads/")
    assert str(tmp_path) not in path
    assert os.path.exists(store.local_path(path))


def test_remove_quietly(tmp_path):
    store = UploadStore(str(tmp_path))
    path = asyncio.run(store.save(upload("x.png")))

    assert asyncio.run(store.remove_quietly(path)) is True
    assert os.listdir(tmp_path) == []
    # second time the file is gone: logged, not raised
    assert asyncio.run(store.remove_quietly(path)) is False
    assert asyncio.run(store.remove_quietly(None)) is False


def test_remove_only_touches_upload_dir(tmp_path):
    outside = tmp_path / "keep.png"
    outside.write_bytes(b"x")
    store = UploadStore(str(tmp_path / "uploads"))

    assert asyncio.run(store.remove_quietly(str(outside))) is False
    assert outside.exists()


def test_has_upload():
    assert has_upload(upload("a.png"))
    assert not has_upload(upload(""))
    assert not has_upload(None)


def test_get_file_extension():
    assert get_file_extension("photo.jpeg") == ".jpeg"
    assert get_file_extension("noext") == ""
