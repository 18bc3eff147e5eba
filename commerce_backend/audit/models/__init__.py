"""
PATH: audit/models/__init__.py

Audit models export surface.
"""

from .audit_record import AuditRecord

__all__ = ["AuditRecord"]
