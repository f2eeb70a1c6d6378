from fastapi import Request

from snaphub.services.photo_service import PhotoService


def get_photo_service(request: Request) -> PhotoService:
    return request.app.state.photo_service
