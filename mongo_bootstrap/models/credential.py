"""
Credential and bootstrap models.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, SecretStr

from mongo_bootstrap.database.databases import admin_db, test_db


class BootstrapStrategy(str, Enum):
    """How the administrative identity is obtained."""
    FIXED = "fixed"  # built-in identity, also provisions the sample namespace
    ENV = "env"      # identity from MONGO_INITDB_ROOT_USERNAME / _PASSWORD


class CredentialOutcome(str, Enum):
    """What happened to the administrative credential during a run."""
    CREATED = "created"
    EXISTS = "exists"
    SKIPPED = "skipped"


class RoleGrant(BaseModel):
    """A role bound to the database it applies to."""
    role: str = Field(..., description="Role name, e.g. root")
    db: str = Field(..., description="Database the role is scoped to")

    def as_document(self) -> dict[str, str]:
        return {"role": self.role, "db": self.db}


def root_grant() -> RoleGrant:
    """The root role on the admin database."""
    return RoleGrant(role=admin_db.ROOT_ROLE, db=admin_db.DB_NAME)


class Credential(BaseModel):
    """
    Administrative user to provision in the admin database.
    """
    username: str = Field(..., min_length=1, description="User identifier")
    password: SecretStr = Field(..., description="User secret")
    roles: list[RoleGrant] = Field(
        default_factory=lambda: [root_grant()],
        description="Role grants assigned on creation"
    )


class BootstrapConfig(BaseModel):
    """
    Configuration for a single bootstrap run.

    `root_username` / `root_password` carry the environment-supplied identity
    used by the env strategy. `admin` is the fixed identity used by the fixed
    strategy, and by the env strategy when `fallback_enabled` is set and the
    environment supplies no complete identity.
    """
    strategy: BootstrapStrategy = BootstrapStrategy.ENV
    root_username: Optional[str] = None
    root_password: Optional[SecretStr] = None
    admin: Credential = Field(
        default_factory=lambda: Credential(
            username=admin_db.DEFAULT_ADMIN_USERNAME,
            password=admin_db.DEFAULT_ADMIN_PASSWORD,
        )
    )
    fallback_enabled: bool = False
    sample_db: str = test_db.DB_NAME
    sample_collection: str = test_db.Collections.INIT
    profiling_level: int = Field(default=test_db.PROFILING_LEVEL, ge=0, le=2)

    def env_credential(self) -> Optional[Credential]:
        """Credential from the environment, or None unless both parts are set."""
        if not self.root_username or self.root_password is None:
            return None
        if not self.root_password.get_secret_value():
            return None
        return Credential(username=self.root_username, password=self.root_password)


class BootstrapResult(BaseModel):
    """Summary of what a bootstrap run did."""
    strategy: BootstrapStrategy
    credential: CredentialOutcome
    username: Optional[str] = None
    collection_created: Optional[bool] = Field(
        None,
        description="False if the collection already existed, None if not attempted"
    )
    profiling_level: Optional[int] = None
