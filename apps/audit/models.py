"""Audit trail of booking and lease transitions."""

from __future__ import annotations

from django.db import models  # type: ignore


class AuditRecord(models.Model):
    """A domain event as it was published"""

    event_id = models.UUIDField(unique=True)
    event_type = models.CharField(max_length=64)
    object_type = models.CharField(max_length=32)  # 'booking', 'lease'
    object_id = models.BigIntegerField(null=True, blank=True)
    details = models.JSONField(default=dict)
    occurred_at = models.DateTimeField()
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['object_type', 'object_id'], name='audit_object_idx'),
            models.Index(fields=['event_type', 'occurred_at'], name='audit_event_type_idx'),
        ]
        ordering = ['-occurred_at']

    def __str__(self):
        return f"{self.event_type} {self.object_type}#{self.object_id} at {self.occurred_at}"

    @classmethod
    def log(cls, event, object_type: str):
        """Store an event, ignoring one that was already recorded"""
        data = event.to_dict()
        record, _ = cls.objects.get_or_create(
            event_id=event.event_id,
            defaults={
                'event_type': data['event_type'],
                'object_type': object_type,
                'object_id': data['aggregate_id'],
                'details': data['payload'],
                'occurred_at': event.occurred_at,
            },
        )
        return record
