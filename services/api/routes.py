from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Annotated, BinaryIO

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse
from loguru import logger
from starlette.background import BackgroundTask

from core.storage.models import SbomFile
from core.storage.service import StorageAdministration
from services.api.dependencies import get_storage_service


router = APIRouter(prefix="/api/v1/storage", tags=["Storage"])

CHUNK_SIZE = 64 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"

StorageServiceDep = Annotated[StorageAdministration, Depends(get_storage_service)]
UploadFiles = Annotated[list[UploadFile] | None, File(description="The files to upload")]


def _upload_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def _to_sbom_files(uploads: list[UploadFile]) -> list[SbomFile]:
    return [
        SbomFile(
            filename=upload.filename or "",
            content_type=upload.content_type or DEFAULT_CONTENT_TYPE,
            size=_upload_size(upload),
            content=upload.file,
        )
        for upload in uploads
    ]


def _no_files() -> PlainTextResponse:
    return PlainTextResponse("No files provided", status_code=status.HTTP_400_BAD_REQUEST)


def _iter_and_close(stream: BinaryIO) -> Iterator[bytes]:
    try:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


@router.post(
    "/generations/{generation_id}",
    summary="Upload Generation SBOMs",
    description="Uploads one or more files associated with a specific Generation ID. "
    "Returns a map of Filename -> Permanent URL.",
    response_model=dict[str, str],
)
def upload_generation(
    generation_id: str,
    service: StorageServiceDep,
    files: UploadFiles = None,
):
    if not files:
        return _no_files()
    return JSONResponse(service.store_generation_sboms(generation_id, _to_sbom_files(files)))


@router.post(
    "/generations/{generation_id}/enhancements/{enhancement_id}",
    summary="Upload Enhancement SBOMs",
    description="Uploads one or more files associated with a specific Enhancement step. "
    "Returns a map of Filename -> Permanent URL.",
    response_model=dict[str, str],
)
def upload_enhancement(
    generation_id: str,
    enhancement_id: str,
    service: StorageServiceDep,
    files: UploadFiles = None,
):
    if not files:
        return _no_files()
    return JSONResponse(
        service.store_enhancement_sboms(generation_id, enhancement_id, _to_sbom_files(files))
    )


@router.get(
    "/content/{path:path}",
    summary="Download File",
    description="Streams the content of a stored file based on its storage key path.",
    response_class=StreamingResponse,
)
def download(path: str, service: StorageServiceDep) -> StreamingResponse:
    stream = service.get_file_content(path)
    filename = path.rsplit("/", 1)[-1]
    logger.debug("Streaming {} as {}", path, filename)
    return StreamingResponse(
        _iter_and_close(stream),
        media_type=DEFAULT_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        # covers responses that fail before the body is iterated
        background=BackgroundTask(stream.close),
    )


__all__ = ["router"]
