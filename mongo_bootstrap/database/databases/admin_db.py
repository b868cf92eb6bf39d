"""
Admin database configuration.
The engine's built-in namespace holding the user and role registries.
"""

DB_NAME = "admin"

# Role granted to the bootstrap credential, scoped to DB_NAME
ROOT_ROLE = "root"

# Identity used by the fixed-identity bootstrap
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


class Collections:
    """Collection names in the admin database."""
    SYSTEM_USERS = "system.users"


class Commands:
    """Admin commands issued by the bootstrap."""
    PING = "ping"
    USERS_INFO = "usersInfo"
    CREATE_USER = "createUser"
