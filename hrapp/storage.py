import shutil
from pathlib import Path

from fastapi import UploadFile

PHOTO_FILENAME = "photo.png"
CV_FILENAME = "cv.pdf"
PUBLIC_PREFIX = "/uploads"


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def employee_dir(upload_root: Path, employee_id: int) -> Path:
    return upload_root / f"employee_{employee_id}"

def public_path(employee_id: int, filename: str) -> str:
    return f"{PUBLIC_PREFIX}/employee_{employee_id}/{filename}"

def has_content(upload: UploadFile | None) -> bool:
    return upload is not None and bool(upload.filename) and (upload.size is None or upload.size > 0)

def save_upload(upload_root: Path, employee_id: int, upload: UploadFile, filename: str) -> str:
    """Write an upload under the employee's directory; returns the public path."""
    target_dir = employee_dir(upload_root, employee_id)
    _ensure_dir(target_dir)
    upload.file.seek(0)
    (target_dir / filename).write_bytes(upload.file.read())
    return public_path(employee_id, filename)

def replace_upload(
    upload_root: Path,
    employee_id: int,
    upload: UploadFile,
    filename: str,
    previous: str | None,
) -> str:
    if previous and previous.startswith(PUBLIC_PREFIX + "/"):
        old = upload_root / Path(previous).relative_to(PUBLIC_PREFIX)
        if old.exists():
            old.unlink()
    return save_upload(upload_root, employee_id, upload, filename)

def discard_uploads(upload_root: Path, employee_id: int) -> None:
    shutil.rmtree(employee_dir(upload_root, employee_id), ignore_errors=True)
