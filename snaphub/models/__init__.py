from snaphub.models.photo_document import PhotoDocument

__all__ = ["PhotoDocument"]
