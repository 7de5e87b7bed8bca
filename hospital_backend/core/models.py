from django.db import models


class AuditLog(models.Model):
    """Audit trail for record changes.

    One row per create/update/delete of a doctor, patient or surgery.
    ``object_id`` is a plain integer so the row survives deletion of the
    record it describes.
    """

    action = models.CharField(max_length=50, db_index=True)
    object_type = models.CharField(max_length=50, blank=True, default='', db_index=True)
    object_id = models.BigIntegerField(null=True, blank=True, db_index=True)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)
    meta = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = 'core_auditlog'
        ordering = ['-timestamp', '-id']
        verbose_name = 'Audit Log'
        verbose_name_plural = 'Audit Logs'
        indexes = [
            models.Index(fields=['action', 'timestamp'], name='core_audit_action_ts_idx'),
            models.Index(fields=['object_type', 'object_id'], name='core_audit_object_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.timestamp} {self.action} ({self.object_type}={self.object_id})"
