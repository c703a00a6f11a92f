import io

from fastapi import UploadFile

from hrapp.storage import PHOTO_FILENAME, has_content, replace_upload, save_upload


def _upload(data: bytes, filename: str = "upload.bin") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename, size=len(data))


def test_save_upload_writes_under_employee_dir(tmp_path):
    path = save_upload(tmp_path, 7, _upload(b"png"), PHOTO_FILENAME)
    assert path == "/uploads/employee_7/photo.png"
    assert (tmp_path / "employee_7" / "photo.png").read_bytes() == b"png"


def test_replace_upload_removes_previous_file(tmp_path):
    save_upload(tmp_path, 7, _upload(b"old"), "old.png")
    path = replace_upload(tmp_path, 7, _upload(b"new"), PHOTO_FILENAME, "/uploads/employee_7/old.png")
    assert path == "/uploads/employee_7/photo.png"
    assert not (tmp_path / "employee_7" / "old.png").exists()
    assert (tmp_path / "employee_7" / "photo.png").read_bytes() == b"new"


def test_has_content():
    assert has_content(_upload(b"x"))
    assert not has_content(_upload(b""))
    assert not has_content(_upload(b"x", filename=""))
    assert not has_content(None)
