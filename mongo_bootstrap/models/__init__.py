"""
Pydantic models for bootstrap configuration and results.
"""
from mongo_bootstrap.models.credential import (
    BootstrapConfig,
    BootstrapResult,
    BootstrapStrategy,
    Credential,
    CredentialOutcome,
    RoleGrant,
    root_grant,
)

__all__ = [
    "BootstrapConfig",
    "BootstrapResult",
    "BootstrapStrategy",
    "Credential",
    "CredentialOutcome",
    "RoleGrant",
    "root_grant",
]
