"""
Domain Services Package

Architectural Intent:
- Contains the reconcilers, one per managed resource kind
- The shared pass pipeline lives in Reconciler
"""

from cairn.domain.services.reconciler import Reconciler
from cairn.domain.services.disk_reconciler import DiskReconciler
from cairn.domain.services.resource_group_reconciler import ResourceGroupReconciler

__all__ = [
    "Reconciler",
    "DiskReconciler",
    "ResourceGroupReconciler",
]
