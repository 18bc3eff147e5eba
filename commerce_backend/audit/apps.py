# audit/apps.py

"""
AUDIT APP CONFIG

Append-only transaction audit trail:
- One AuditRecord per committed sale
- Records are never updated or deleted
"""

from django.apps import AppConfig


class AuditConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "audit"
    verbose_name = "Transaction Audit"
