"""
Report schemas - request bodies for reports, comments and status.

Enum membership is checked by the service layer so that the error
message lists the allowed values.
"""

from typing import Optional
from pydantic import BaseModel, Field, AliasChoices


class ReportCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    # Older clients send wasteType / waste_type
    category: Optional[str] = Field(
        None,
        validation_alias=AliasChoices('category', 'waste_type', 'wasteType')
    )
    severity: Optional[str] = None
    image_url: Optional[str] = Field(
        None,
        max_length=255,
        validation_alias=AliasChoices('image_url', 'imageUrl', 'image_path')
    )
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class CommentCreate(BaseModel):
    text: Optional[str] = Field(
        None,
        max_length=5000,
        validation_alias=AliasChoices('text', 'comment')
    )


class StatusUpdate(BaseModel):
    status: str
