"""Print the student's current activities and any malformed records, without notifying."""
from mbkm_notifier.api import ActivityClient
from mbkm_notifier.detector import decode_payload

client = ActivityClient()
activities, skipped = decode_payload(client.fetch())

print(f"Total: {len(activities)} activities\n")
for i, activity in enumerate(activities):
    print(f"  {i+1}. [{activity.id}] {activity.name} @ {activity.partner_name} -> {activity.status}")

if skipped:
    print(f"\nSkipped {len(skipped)} malformed record(s):")
    for error in skipped:
        print(f"  - data[{error.index}]: {error.reason}")
