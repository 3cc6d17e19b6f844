import io

from fastapi import UploadFile

from site_backend.core.storage import generate_filename, save_upload


def test_generated_names_keep_extension_and_are_unique():
    names = {generate_filename("photo.JPG") for _ in range(100)}
    assert len(names) == 100
    assert all(name.endswith(".JPG") for name in names)


def test_generated_name_without_extension():
    assert "." not in generate_filename("README")
    assert "." not in generate_filename(None)


def test_save_upload_creates_directory_and_writes_bytes(tmp_path):
    upload_dir = tmp_path / "nested" / "uploads"
    upload = UploadFile(file=io.BytesIO(b"binary\x00content"), filename="x.bin")

    relative = save_upload(upload, upload_dir)

    name = relative.split("/", 1)[1]
    assert relative == f"uploads/{name}"
    assert (upload_dir / name).read_bytes() == b"binary\x00content"
