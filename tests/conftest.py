"""
Global test fixtures for mongo_bootstrap.

This module provides shared fixtures for all tests including:
- An in-memory fake MongoDB engine covering the commands the bootstrap issues
- Environment isolation for settings
- Credential and config factories
"""

import logging
from typing import Any, Optional

import pytest
from pymongo.errors import CollectionInvalid, OperationFailure

from mongo_bootstrap.config import get_settings
from mongo_bootstrap.models.credential import BootstrapConfig, Credential


# =============================================================================
# Fake MongoDB Engine
# =============================================================================

class FakeCollection:
    """Collection supporting count_documents over in-memory documents."""

    def __init__(self, documents: list[dict]):
        self.documents = documents

    async def count_documents(self, filter: dict) -> int:
        return sum(
            1 for doc in self.documents
            if all(doc.get(k) == v for k, v in filter.items())
        )


class FakeDatabase:
    """
    Database handle backed by FakeMongoClient state.

    Supports the commands used by the bootstrap: ping, usersInfo,
    createUser and profile, plus create_collection.
    """

    def __init__(self, client: "FakeMongoClient", name: str):
        self.client = client
        self.name = name

    def __getitem__(self, name: str) -> FakeCollection:
        if self.name == "admin" and name == "system.users":
            return FakeCollection(self.client.users)
        return FakeCollection([])

    async def command(self, command: str, value: Any = 1, **kwargs) -> dict:
        self.client.commands.append((self.name, command, value, kwargs))
        if self.client.fail_with is not None:
            raise self.client.fail_with

        if command == "ping":
            return {"ok": 1.0}
        if command == "usersInfo":
            users = [
                {"user": u["user"], "db": u["db"], "roles": u["roles"]}
                for u in self.client.users
                if u["user"] == value and u["db"] == self.name
            ]
            return {"users": users, "ok": 1.0}
        if command == "createUser":
            if any(u["user"] == value and u["db"] == self.name for u in self.client.users):
                raise OperationFailure(f"User \"{value}@{self.name}\" already exists", code=51003)
            self.client.users.append({
                "_id": f"{self.name}.{value}",
                "user": value,
                "db": self.name,
                "pwd": kwargs["pwd"],
                "roles": kwargs["roles"],
            })
            return {"ok": 1.0}
        if command == "profile":
            previous = self.client.profiling.get(self.name, 0)
            self.client.profiling[self.name] = value
            return {"was": previous, "ok": 1.0}
        raise OperationFailure(f"no such command: '{command}'", code=59)

    async def create_collection(self, name: str, **kwargs) -> FakeCollection:
        if self.client.create_collection_error is not None:
            raise self.client.create_collection_error
        collections = self.client.collections.setdefault(self.name, set())
        if name in collections:
            raise CollectionInvalid(f"collection {name} already exists")
        collections.add(name)
        return FakeCollection([])


class FakeMongoClient:
    """In-memory stand-in for AsyncIOMotorClient."""

    def __init__(self):
        self.users: list[dict] = []
        self.collections: dict[str, set[str]] = {}
        self.profiling: dict[str, int] = {}
        self.commands: list[tuple] = []
        self.fail_with: Optional[Exception] = None
        self.create_collection_error: Optional[Exception] = None
        self.closed = False

    def __getitem__(self, name: str) -> FakeDatabase:
        return FakeDatabase(self, name)

    def close(self) -> None:
        self.closed = True

    def get_user(self, username: str, db: str = "admin") -> Optional[dict]:
        """Test helper: the stored user document."""
        for user in self.users:
            if user["user"] == username and user["db"] == db:
                return user
        return None


@pytest.fixture
def fake_mongo_client() -> FakeMongoClient:
    """A fresh, empty fake MongoDB engine."""
    return FakeMongoClient()


# =============================================================================
# Environment Fixtures
# =============================================================================

BOOTSTRAP_ENV_VARS = [
    "MONGO_URI",
    "MONGO_SERVER_SELECTION_TIMEOUT_MS",
    "MONGO_INITDB_ROOT_USERNAME",
    "MONGO_INITDB_ROOT_PASSWORD",
    "BOOTSTRAP_STRATEGY",
    "BOOTSTRAP_FALLBACK_ENABLED",
    "BOOTSTRAP_ADMIN_USERNAME",
    "BOOTSTRAP_ADMIN_PASSWORD",
    "BOOTSTRAP_SAMPLE_DB",
    "BOOTSTRAP_SAMPLE_COLLECTION",
    "BOOTSTRAP_PROFILING_LEVEL",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """
    Isolate every test from the host environment.

    Removes bootstrap variables, runs from an empty directory so no .env
    file is picked up, and clears the settings cache.
    """
    for name in BOOTSTRAP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Credential Fixtures
# =============================================================================

@pytest.fixture
def svc_credential() -> Credential:
    """Credential as supplied through the environment."""
    return Credential(username="svc", password="s3cr3t")


@pytest.fixture
def fixed_config() -> BootstrapConfig:
    """Config for the fixed-identity bootstrap with all defaults."""
    return BootstrapConfig(strategy="fixed")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by main.configure_logging between tests."""
    yield
    package_logger = logging.getLogger("mongo_bootstrap")
    package_logger.handlers = []
    package_logger.setLevel(logging.NOTSET)
