"""
Data models for the MBKM Activity Notifier.

Defines Pydantic models for:
- Activity records returned by the Kampus Merdeka API
- Status changes detected between two polls
- The result of a single detection pass
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


# Terminal status; activities in this state are never reported
PROCESSED_STATUS = "PROCESSED"


class Activity(BaseModel):
    """
    Represents one of the student's program activities.
    
    Attributes:
        id: Unique activity identifier from the API
        status: Current status of the student's participation
        name: Activity name (``nama_kegiatan``)
        partner_name: Brand name of the partner organisation (``mitra_brand_name``)
        logo_url: Logo of the partner organisation (``mitra_logo``)
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    id: StrictInt
    status: str
    name: Optional[str] = Field(default=None, alias="nama_kegiatan")
    partner_name: Optional[str] = Field(default=None, alias="mitra_brand_name")
    logo_url: Optional[str] = Field(default=None, alias="mitra_logo")
    
    @property
    def is_processed(self) -> bool:
        """PROCESSED activities are never reported."""
        return self.status == PROCESSED_STATUS


class RecordError(BaseModel):
    """A record from the ``data`` list that could not be decoded."""
    index: int
    reason: str


class StatusChange(BaseModel):
    """
    A status transition for one activity.
    
    ``previous_status`` is None when the activity had not been seen before.
    """
    activity: Activity
    previous_status: Optional[str] = None


class ChangeSet(BaseModel):
    """
    Outcome of one detection pass over an activities payload.
    
    Attributes:
        message: Notification text, empty when nothing changed
        image_url: Logo of the last changed activity
        changes: Status transitions in payload order
        skipped: Records that were dropped as malformed
    """
    message: str = ""
    image_url: Optional[str] = None
    changes: List[StatusChange] = Field(default_factory=list)
    skipped: List[RecordError] = Field(default_factory=list)
    
    @property
    def has_changes(self) -> bool:
        return bool(self.message)
