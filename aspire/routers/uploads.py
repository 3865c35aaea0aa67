# aspire/routers/uploads.py
from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from ..auth.guards import require_admin
from ..deps import get_uploader
from ..errors import BadRequest
from ..schemas import ImageUploadOut
from ..storage import ALLOWED_TYPES, MAX_BYTES

router = APIRouter(tags=["uploads"])


@router.post("/upload-image", response_model=ImageUploadOut)
async def upload_image(
    questionImage: UploadFile = File(...),
    _admin=Depends(require_admin),
    uploader=Depends(get_uploader),
):
    content_type = (questionImage.content_type or "").lower()
    if content_type not in ALLOWED_TYPES:
        raise BadRequest("Only image files can be uploaded")

    content = await questionImage.read()
    if not content:
        raise BadRequest("empty file")
    if len(content) > MAX_BYTES:
        raise BadRequest("Image is larger than 5 MB")

    url = uploader.upload(content, content_type, questionImage.filename or "")
    return {"imageUrl": url}
