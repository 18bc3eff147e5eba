# audit/services/audit_trail.py

"""
AUDIT TRAIL SERVICE

Single append point for sale audit records.
Callers compose this inside their own transaction so the audit row commits
(or rolls back) together with the mutations it describes.
"""

from __future__ import annotations

from django.db import transaction

from audit.models import AuditRecord


@transaction.atomic
def record_sale(*, client, product, quantity: int, total) -> AuditRecord:
    """
    Append one AuditRecord for a completed sale.
    The returned record's created_at is the store-assigned timestamp.
    """
    return AuditRecord.objects.create(
        client=client,
        product=product,
        quantity=quantity,
        total=total,
    )
