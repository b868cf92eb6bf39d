"""
Service layer for bootstrap logic.
"""
from mongo_bootstrap.services.bootstrap_service import BootstrapService

__all__ = ["BootstrapService"]
