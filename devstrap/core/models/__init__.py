"""
Domain models — Pydantic types for a provisioning run.

    from devstrap.core.models import Action, Receipt, Probe, RemoteResource, RepoResource
"""

from devstrap.core.models.action import Action, Receipt
from devstrap.core.models.probe import Probe
from devstrap.core.models.resource import RemoteResource, RepoResource

__all__ = [
    "Action",
    "Probe",
    "Receipt",
    "RemoteResource",
    "RepoResource",
]
