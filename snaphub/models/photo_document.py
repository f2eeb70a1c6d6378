from sqlalchemy import Column, String, Integer, JSON

from snaphub.database import Base


class PhotoDocument(Base):
    __tablename__ = "photo_documents"

    id = Column(String, primary_key=True)
    created_at = Column(String, nullable=False, index=True)
    version = Column(Integer, nullable=False, default=1)
    body = Column(JSON, nullable=False)
