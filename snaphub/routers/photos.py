from fastapi import APIRouter, Body, Depends, File, Form, UploadFile

from snaphub.dependencies import get_photo_service
from snaphub.schemas.photo import CommentCreate, Photo
from snaphub.services.photo_service import PhotoService

router = APIRouter(prefix="/photos", tags=["photos"])


@router.post("", status_code=201, response_model=Photo)
async def upload_photo(
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    caption: str | None = Form(None),
    location: str | None = Form(None),
    people: str | None = Form(None),
    service: PhotoService = Depends(get_photo_service),
):
    data = await file.read() if file is not None else None
    return await service.upload_photo(
        data,
        filename=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        title=title,
        caption=caption,
        location=location,
        people=people,
    )


@router.get("", response_model=list[Photo])
async def list_photos(q: str | None = None, service: PhotoService = Depends(get_photo_service)):
    return await service.list_photos(q)


@router.get("/{photo_id}", response_model=Photo)
async def get_photo(photo_id: str, service: PhotoService = Depends(get_photo_service)):
    return await service.get_photo(photo_id)


@router.post("/{photo_id}/comments", status_code=201, response_model=Photo)
async def add_comment(
    photo_id: str,
    payload: CommentCreate | None = Body(None),
    service: PhotoService = Depends(get_photo_service),
):
    payload = payload or CommentCreate()
    return await service.add_comment(
        photo_id,
        payload.comment,
        name=payload.name,
        rating=payload.rating,
    )
