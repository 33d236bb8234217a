"""
Status change detection for MBKM activities.

Decodes the activities payload into typed records and compares each
activity's status with the last status seen for it. Only transitions
produce notification text:

- PROCESSED activities are always ignored
- An unseen activity, or one whose status changed, yields one block
- The tracker is updated after a block has been produced
"""

import json
import logging
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from mbkm_notifier.exceptions import FormatError
from mbkm_notifier.models import Activity, ChangeSet, RecordError, StatusChange
from mbkm_notifier.notify.formatters import MessageFormatter

logger = logging.getLogger(__name__)


def decode_payload(raw: str) -> Tuple[List[Activity], List[RecordError]]:
    """
    Decode an activities payload.
    
    Args:
        raw: Response body from the activities endpoint
        
    Returns:
        Tuple of decoded activities (in payload order) and the records
        that were skipped as malformed
        
    Raises:
        FormatError: If the body is not JSON or ``data`` is not a list
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Activities payload is not valid JSON: {e}")
    
    if not isinstance(payload, dict):
        raise FormatError(f"Unexpected payload format: {type(payload).__name__}")
    
    records = payload.get("data")
    if not isinstance(records, list):
        raise FormatError(f"Unexpected data format: {type(records).__name__}")
    
    activities: List[Activity] = []
    errors: List[RecordError] = []
    
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            errors.append(RecordError(index=index, reason=f"not an object: {type(record).__name__}"))
            continue
        try:
            activities.append(Activity.model_validate(record))
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "record"
                for err in e.errors()
            )
            errors.append(RecordError(index=index, reason=f"invalid fields: {fields}"))
    
    return activities, errors


class StatusTracker:
    """
    Last known status of each activity, keyed by activity id.
    
    Lives for the lifetime of the process only.
    """
    
    def __init__(self, initial: Optional[Dict[int, str]] = None):
        self._statuses: Dict[int, str] = dict(initial or {})
    
    def get(self, activity_id: int) -> Optional[str]:
        return self._statuses.get(activity_id)
    
    def has_changed(self, activity: Activity) -> bool:
        """True if the activity is unseen or its status differs from the last one."""
        return self._statuses.get(activity.id) != activity.status
    
    def record(self, activity: Activity) -> None:
        self._statuses[activity.id] = activity.status
    
    def snapshot(self) -> Dict[int, str]:
        """Copy of the current id -> status mapping."""
        return dict(self._statuses)
    
    def __contains__(self, activity_id: int) -> bool:
        return activity_id in self._statuses
    
    def __len__(self) -> int:
        return len(self._statuses)
    

class ChangeDetector:
    """
    Produces notification text for activities whose status changed.
    
    When several activities change in the same poll they share one
    message, and only the last changed activity's logo is kept as the
    image URL.
    """
    
    def __init__(
        self,
        tracker: Optional[StatusTracker] = None,
        formatter: Optional[MessageFormatter] = None,
    ):
        self.tracker = tracker if tracker is not None else StatusTracker()
        self.formatter = formatter or MessageFormatter()
    
    def detect(self, raw: str) -> ChangeSet:
        """
        Compare a raw activities payload against the tracker.
        
        Args:
            raw: Response body from the activities endpoint
            
        Returns:
            ChangeSet: Message (empty if nothing changed), image URL,
            the detected changes and any skipped records
            
        Raises:
            FormatError: If the payload cannot be decoded
        """
        activities, skipped = decode_payload(raw)
        return self.compare(activities, skipped)
    
    def compare(
        self,
        activities: List[Activity],
        skipped: Optional[List[RecordError]] = None,
    ) -> ChangeSet:
        """
        Compare already decoded activities against the tracker.
        
        Args:
            activities: Activities in payload order
            skipped: Malformed records to pass through to the result
            
        Returns:
            ChangeSet: Detection result
        """
        blocks: List[str] = []
        changes: List[StatusChange] = []
        image_url: Optional[str] = None
        
        for activity in activities:
            if activity.is_processed:
                continue
            if not self.tracker.has_changed(activity):
                continue
            
            changes.append(
                StatusChange(
                    activity=activity,
                    previous_status=self.tracker.get(activity.id),
                )
            )
            blocks.append(self.formatter.format_activity(activity))
            image_url = activity.logo_url or None
            self.tracker.record(activity)
        
        if changes:
            logger.info(f"Detected {len(changes)} status change(s)")
        
        return ChangeSet(
            message="\n\n".join(blocks),
            image_url=image_url,
            changes=changes,
            skipped=list(skipped or []),
        )
