from sqlalchemy import Column, DateTime, String, Text, func

from .database import Base


class DispatchDocument(Base):
    """The whole dispatch datastore, serialized as one JSON document."""

    __tablename__ = "dispatch_documents"
    name = Column(String(64), primary_key=True)
    data = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
