"""
Bootstrap service for first-run provisioning.

Provides:
- Administrative credential provisioning (never overwrites an existing user)
- Sample namespace with an empty collection
- Profiling level for the sample namespace

Every step is idempotent; running the service twice leaves the same state
as running it once.
"""
import logging
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import CollectionInvalid, OperationFailure

from mongo_bootstrap.database.connections import get_database
from mongo_bootstrap.database.databases import admin_db, test_db
from mongo_bootstrap.models.credential import (
    BootstrapConfig,
    BootstrapResult,
    BootstrapStrategy,
    Credential,
    CredentialOutcome,
)

logger = logging.getLogger(__name__)

# Server error code for "collection already exists"
NAMESPACE_EXISTS = 48


class BootstrapService:
    """Service for idempotent bootstrap operations."""

    def __init__(self, client: AsyncIOMotorClient):
        """Initialize with a connected client."""
        self.client = client
        self.admin_db = get_database(client, admin_db.DB_NAME)
        self.users_registry = self.admin_db[admin_db.Collections.SYSTEM_USERS]

    # ==================== Credentials ====================

    async def get_user(self, username: str) -> Optional[dict[str, Any]]:
        """
        Look up a user in the admin database.

        Args:
            username: User identifier

        Returns:
            The user info document, or None if no such user exists
        """
        result = await self.admin_db.command(admin_db.Commands.USERS_INFO, username)
        users = result.get("users", [])
        return users[0] if users else None

    async def count_users(self, username: str) -> int:
        """Count registry entries for a username."""
        return await self.users_registry.count_documents({"user": username})

    async def create_user(self, credential: Credential) -> None:
        """
        Create a user in the admin database with the credential's grants.

        Raises:
            OperationFailure: If the user exists or the session lacks privileges
        """
        await self.admin_db.command(
            admin_db.Commands.CREATE_USER,
            credential.username,
            pwd=credential.password.get_secret_value(),
            roles=[grant.as_document() for grant in credential.roles],
        )

    async def ensure_user(self, credential: Credential) -> CredentialOutcome:
        """Create the user unless `usersInfo` already reports it."""
        if await self.get_user(credential.username) is not None:
            logger.debug(f"User {credential.username} present, leaving it unchanged")
            return CredentialOutcome.EXISTS

        await self.create_user(credential)
        logger.debug(f"Created user {credential.username}")
        return CredentialOutcome.CREATED

    async def ensure_registered_user(self, credential: Credential) -> CredentialOutcome:
        """Create the user unless the users registry already holds it."""
        if await self.count_users(credential.username) > 0:
            logger.info(f"User already exists: {credential.username}. Skipping creation.")
            return CredentialOutcome.EXISTS

        logger.info(f"Creating root user: {credential.username}")
        await self.create_user(credential)
        return CredentialOutcome.CREATED

    # ==================== Namespace ====================

    async def ensure_collection(self, db: AsyncIOMotorDatabase, name: str) -> bool:
        """
        Create an empty collection, tolerating only "already exists".

        Args:
            db: Database to create the collection in
            name: Collection name

        Returns:
            True if the collection was created, False if it already existed

        Raises:
            PyMongoError: Any failure other than the collection already existing
        """
        try:
            await db.create_collection(name)
        except CollectionInvalid:
            logger.debug(f"Collection {db.name}.{name} already exists")
            return False
        except OperationFailure as e:
            if e.code != NAMESPACE_EXISTS:
                raise
            logger.debug(f"Collection {db.name}.{name} already exists (server)")
            return False
        return True

    async def set_profiling_level(self, db: AsyncIOMotorDatabase, level: int) -> None:
        """Set the profiling level of a database."""
        await db.command(test_db.PROFILE_COMMAND, level)
        logger.debug(f"Profiling level for {db.name} set to {level}")

    # ==================== Runs ====================

    async def run_fixed(
        self,
        credential: Credential,
        sample_db: str = test_db.DB_NAME,
        sample_collection: str = test_db.Collections.INIT,
        profiling_level: int = test_db.PROFILING_LEVEL,
    ) -> BootstrapResult:
        """
        Fixed-identity bootstrap.

        Ensures the credential, then the sample collection, then the
        profiling level, in that order.
        """
        outcome = await self.ensure_user(credential)

        db = get_database(self.client, sample_db)
        created = await self.ensure_collection(db, sample_collection)
        await self.set_profiling_level(db, profiling_level)

        return BootstrapResult(
            strategy=BootstrapStrategy.FIXED,
            credential=outcome,
            username=credential.username,
            collection_created=created,
            profiling_level=profiling_level,
        )

    async def run_from_env(
        self,
        credential: Optional[Credential],
        fallback: Optional[Credential] = None,
    ) -> BootstrapResult:
        """
        Environment-supplied identity bootstrap.

        Args:
            credential: Identity from the environment, None if incomplete
            fallback: Identity to use instead when credential is None

        Returns:
            BootstrapResult; SKIPPED when there is no identity to provision
        """
        credential = credential or fallback
        if credential is None:
            logger.debug("No root username/password in environment, nothing to do")
            return BootstrapResult(
                strategy=BootstrapStrategy.ENV,
                credential=CredentialOutcome.SKIPPED,
            )

        outcome = await self.ensure_registered_user(credential)
        return BootstrapResult(
            strategy=BootstrapStrategy.ENV,
            credential=outcome,
            username=credential.username,
        )

    async def run(self, config: BootstrapConfig) -> BootstrapResult:
        """Run the bootstrap selected by the configuration."""
        if config.strategy == BootstrapStrategy.FIXED:
            return await self.run_fixed(
                config.admin,
                sample_db=config.sample_db,
                sample_collection=config.sample_collection,
                profiling_level=config.profiling_level,
            )

        fallback = config.admin if config.fallback_enabled else None
        return await self.run_from_env(config.env_credential(), fallback=fallback)
