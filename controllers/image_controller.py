from fastapi import Request, UploadFile
from fastapi.responses import Response
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

from services.image_store import ImageStoreService


def _get_store(request: Request) -> ImageStoreService:
    """Retrieve the shared image store service from the app state."""
    store = getattr(request.app.state, "image_store", None)
    if store is None:
        raise RuntimeError("Image store not initialized.")
    return store


def _not_found() -> Response:
    return Response(status_code=404)


def content_disposition(file_name: Optional[str]) -> str:
    """Build an attachment Content-Disposition value for `file_name`.

    The quoted `filename` parameter is always present. Names that are not
    ASCII also get an RFC 5987 `filename*` parameter, with `?` standing in
    for the unencodable characters of the plain `filename`.
    """
    if file_name is None:
        return "attachment"
    ascii_name = file_name.encode("ascii", "replace").decode("ascii")
    escaped = ascii_name.replace("\\", "\\\\").replace('"', '\\"')
    disposition = f'attachment; filename="{escaped}"'
    if ascii_name != file_name:
        disposition += f"; filename*=utf-8''{quote(file_name)}"
    return disposition


async def upload_image(request: Request, file: UploadFile) -> Dict[str, Any]:
    """Store an uploaded file as a new image record.

    Args:
        request: FastAPI Request object (used to access app.state).
        file: Multipart upload; its filename and bytes are stored unchanged.

    Returns:
        The created record as a JSON-ready dict.
    """
    data = await file.read()
    record = await _get_store(request).create(file.filename, data)
    return record.to_json()


async def list_images(request: Request) -> List[Dict[str, Any]]:
    """Return every stored image record."""
    records = await _get_store(request).list_all()
    return [record.to_json() for record in records]


async def get_image(request: Request, image_id: int) -> Union[Dict[str, Any], Response]:
    """Return one record, or an empty 404 response if it does not exist."""
    record = await _get_store(request).get_by_id(image_id)
    if record is None:
        return _not_found()
    return record.to_json()


async def update_image(request: Request, image_id: int, file: UploadFile) -> Union[Dict[str, Any], Response]:
    """Replace the filename and bytes of an existing record.

    Unknown ids yield an empty 404 response; no record is created.
    """
    data = await file.read()
    record = await _get_store(request).update(image_id, file.filename, data)
    if record is None:
        return _not_found()
    return record.to_json()


async def delete_image(request: Request, image_id: int) -> Response:
    """Delete a record. Always answers 200 with an empty body."""
    await _get_store(request).delete_by_id(image_id)
    return Response(status_code=200)


async def download_image(request: Request, image_id: int) -> Response:
    """Controller to return the stored bytes as a file attachment.

    Args:
        request: FastAPI Request (to access app.state.image_store).
        image_id: Integer id of the image row.

    Returns:
        FastAPI `Response` with the raw bytes, a suffix-derived `media_type`,
        an attachment `Content-Disposition` and explicit `Content-Length`;
        or an empty 404 response if the image is not found.
    """
    download = await _get_store(request).download(image_id)
    if download is None:
        return _not_found()

    headers = {
        "Content-Disposition": content_disposition(download.file_name),
        "Content-Length": str(download.content_length),
    }
    return Response(content=download.data, media_type=download.content_type, headers=headers)
