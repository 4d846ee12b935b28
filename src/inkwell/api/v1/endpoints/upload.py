# src/inkwell/api/v1/endpoints/upload.py
"""Image upload endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from inkwell.api.v1.dependencies import get_current_user
from inkwell.schemas.upload import UploadResponse
from inkwell.services.storage import (
    EmptyUploadError,
    UploadStorage,
    UploadTooLargeError,
    get_upload_storage,
)

router = APIRouter(
    prefix="/upload",
    tags=["upload"],
    dependencies=[Depends(get_current_user)],
)

StorageDep = Annotated[UploadStorage, Depends(get_upload_storage)]


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    storage: StorageDep,
    image: UploadFile = File(..., description="Image file"),
) -> UploadResponse:
    """Store an image and return the URL it is served from."""
    try:
        url = await storage.save(image)
    except UploadTooLargeError as err:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(err),
        ) from err
    except EmptyUploadError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    finally:
        await image.close()
    return UploadResponse(url=url)
