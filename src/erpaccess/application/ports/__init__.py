"""Application ports - interfaces for external adapters."""

from erpaccess.application.ports.access_logger import AccessLogger
from erpaccess.application.ports.permission_checker import PermissionChecker
from erpaccess.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccessLogger",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
