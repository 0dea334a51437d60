from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel

from ...core.config import PUBLIC_BASE_URL
from ...core.errors import NotFound
from .storage import LocalFileStore, get_file_store

router = APIRouter(tags=["Uploads"])


class UploadResponse(BaseModel):
    url: str


@router.post("/uploads", response_model=UploadResponse)
async def upload_image(
    store: Annotated[LocalFileStore, Depends(get_file_store)],
    rasm: UploadFile = File(..., description="Image to store"),
):
    filename = await store.save(rasm)
    return {"url": f"{PUBLIC_BASE_URL}/image/{filename}"}


@router.get("/image/{filename}")
async def get_image(filename: str, store: Annotated[LocalFileStore, Depends(get_file_store)]):
    path = store.path_for(filename)
    if path is None:
        raise NotFound("File not found")
    return FileResponse(path)
