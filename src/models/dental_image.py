# src/models/dental_image.py
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from db.database import Base


class DentalImage(Base):
    __tablename__ = "dental_images"
    __table_args__ = (Index("ix_dental_images_user_relative", "user_id", "relative_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Null when the images belong to the patient themselves
    relative_id = Column(
        Integer,
        ForeignKey("family_members.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    image_urls = Column(JSON, nullable=False)  # Ordered Appwrite view URLs
    description = Column(Text, nullable=True)
    image_type = Column(String(50), nullable=False, default="other")
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="dental_images")
    family_member = relationship("FamilyMember", back_populates="dental_images")
