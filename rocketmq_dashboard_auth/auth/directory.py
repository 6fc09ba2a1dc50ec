"""YAML file backed user directory."""

import threading
from pathlib import Path

import structlog
import yaml

from .models import UserRecord

logger = structlog.get_logger()

# (mtime_ns, size) of the users file, None while the file is missing
FileSignature = tuple[int, int] | None


class FileUserDirectory:
    """Loads dashboard users from a YAML file and reloads it when it changes.

    Expected layout::

        users:
          - username: admin
            password: admin
            admin: true
    """

    def __init__(self, users_file: str):
        self.users_file = Path(users_file)
        self.users: dict[str, UserRecord] = {}
        self._signature: FileSignature = None
        self._loaded = False
        self._reload_lock = threading.Lock()

    def _file_signature(self) -> FileSignature:
        try:
            stat = self.users_file.stat()
        except FileNotFoundError:
            return None
        return stat.st_mtime_ns, stat.st_size

    def load_users(self) -> dict[str, UserRecord]:
        """Load all users from the YAML file."""
        signature = self._file_signature()
        self._signature = signature
        self._loaded = True

        if signature is None:
            logger.warning("Users file does not exist", file=str(self.users_file))
            self.users = {}
            return self.users

        try:
            self.users = self._load_yaml_file(self.users_file)
        except Exception as e:
            logger.error(
                "Failed to load users file",
                file=str(self.users_file),
                error=str(e),
            )

        return self.users

    def _load_yaml_file(self, yaml_file: Path) -> dict[str, UserRecord]:
        """Parse the YAML file into a fresh username -> record mapping."""
        with open(yaml_file) as f:
            content = yaml.safe_load(f)

        users: dict[str, UserRecord] = {}
        if not content or "users" not in content:
            return users

        for entry in content["users"] or []:
            try:
                user = self._parse_user(entry)
            except Exception as e:
                logger.error(
                    "Failed to parse user entry",
                    username=entry.get("username") if isinstance(entry, dict) else None,
                    error=str(e),
                )
                continue
            users[user.username] = user

        return users

    def _parse_user(self, entry: dict) -> UserRecord:
        """Parse a single user entry."""
        username = entry["username"]
        if not isinstance(username, str) or not username:
            raise ValueError("username must be a non-empty string")
        return UserRecord(
            username=username,
            password=str(entry.get("password", "")),
            is_admin=bool(entry.get("admin", False)),
        )

    def reload_if_changed(self) -> bool:
        """Reload users when the file was created, removed or modified.

        Returns:
            True if a reload happened
        """
        if self._loaded and self._file_signature() == self._signature:
            return False

        with self._reload_lock:
            # Another thread may have reloaded while we waited
            if self._loaded and self._file_signature() == self._signature:
                return False
            logger.info("Users file changed, reloading", file=str(self.users_file))
            self.load_users()
        return True

    def query_by_username(self, username: str) -> UserRecord | None:
        """Get a specific user by name, picking up edits to the users file."""
        self.reload_if_changed()
        return self.users.get(username)

    def list_usernames(self) -> list[str]:
        """Get list of all usernames."""
        return list(self.users.keys())

    def reload(self) -> dict[str, UserRecord]:
        """Reload users from the file.

        The mapping is replaced as a whole, so lookups running concurrently
        see either the old or the new set of users.
        """
        with self._reload_lock:
            return self.load_users()
