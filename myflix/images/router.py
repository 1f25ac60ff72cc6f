from urllib.parse import quote

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from starlette.concurrency import run_in_threadpool

from ..core.config import Settings
from ..core.dependencies import get_app_settings, get_storage
from ..core.exceptions import ValidationError
from .storage import ObjectStorage

router = APIRouter(tags=["images"])

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/gif"}


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the RFC 5987 UTF-8 name"""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "").replace("\\", "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.get("/list-objects")
async def list_objects(
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    """List the original images in the bucket"""
    contents = await run_in_threadpool(storage.list_objects, settings.INPUT_PREFIX)
    return {"Prefix": settings.INPUT_PREFIX, "Contents": contents}

@router.post("/upload")
async def upload_image(
    image: UploadFile = File(...),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    if image.content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError(
            "Invalid file type",
            errors=[{"field": "image", "message": f"Unsupported content type {image.content_type}"}],
        )

    key = f"{settings.INPUT_PREFIX}{quote(image.filename or 'upload', safe='')}"
    data = await image.read()
    await run_in_threadpool(storage.put_object, key, data, image.content_type)
    return {"message": "File uploaded successfully!", "key": key}

@router.get("/download/{filename}")
async def download_image(
    filename: str,
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    body, content_type = await run_in_threadpool(storage.open_object, f"{settings.INPUT_PREFIX}{filename}")
    return StreamingResponse(
        body.iter_chunks(),
        media_type=content_type or "application/octet-stream",
        headers={"Content-Disposition": content_disposition(filename)},
        background=BackgroundTask(body.close),
    )
