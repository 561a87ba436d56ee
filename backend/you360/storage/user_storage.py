"""
User Storage - persistent user profiles on top of StorageInterface.
"""

import json
import logging
from typing import Optional, Dict
from datetime import datetime, timezone
from .interface import StorageInterface
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)


def _from_json(content: bytes) -> Dict:
    user_data = json.loads(content.decode('utf-8'))
    for key in ('created_at', 'updated_at'):
        if key in user_data:
            user_data[key] = datetime.fromisoformat(user_data[key])
    return user_data


def _to_json(user: Dict) -> str:
    return json.dumps(user, indent=2, ensure_ascii=False, default=lambda v: v.isoformat())


class UserStorage:
    """
    One JSON file per user in ``users/`` plus an email -> user_id index.
    """

    def __init__(self, storage: StorageInterface):
        self.storage = storage
        self.users_dir = "users"
        self._email_index_path = f"{self.users_dir}/email_index.json"

    async def _load_email_index(self) -> Dict[str, str]:
        content = await self.storage.load(self._email_index_path)
        if content is None:
            return {}
        try:
            return json.loads(content.decode('utf-8'))
        except ValueError:
            logger.warning("Email index is unreadable, starting from an empty index")
            return {}

    async def _save_email_index(self, index: Dict[str, str]) -> bool:
        return await self.storage.save(self._email_index_path, json.dumps(index, indent=2))

    async def get_user(self, user_id: str) -> Optional[Dict]:
        content = await self.storage.load(f"{self.users_dir}/{user_id}.json")
        if content is None:
            return None
        try:
            return _from_json(content)
        except ValueError as e:
            logger.error(f"Error loading user {user_id}: {e}")
            return None

    async def get_user_by_email(self, email: str) -> Optional[Dict]:
        index = await self._load_email_index()
        user_id = index.get(email.lower())
        if user_id is None:
            return None
        return await self.get_user(user_id)

    async def create_user(self, user_id: str, name: str, email: str, hashed_password: str) -> Dict:
        """
        Create and persist a new user.

        Returns:
            Dict: Created user data (datetimes as datetime objects)
        """
        now = datetime.now(timezone.utc)
        user_data = {
            "user_id": user_id,
            "name": name,
            "email": email.lower(),
            "hashed_password": hashed_password,
            "created_at": now,
            "updated_at": now,
            "is_active": True,
        }
        await self.storage.save(f"{self.users_dir}/{user_id}.json", _to_json(user_data))

        index = await self._load_email_index()
        index[user_data["email"]] = user_id
        await self._save_email_index(index)
        return user_data

    async def update_user(self, user_id: str, updates: Dict) -> Optional[Dict]:
        user = await self.get_user(user_id)
        if user is None:
            return None
        user.update(updates)
        user['updated_at'] = datetime.now(timezone.utc)
        await self.storage.save(f"{self.users_dir}/{user_id}.json", _to_json(user))
        return user

    async def delete_user(self, user_id: str) -> bool:
        user = await self.get_user(user_id)
        if user is None:
            return False
        index = await self._load_email_index()
        if index.pop(user.get('email', ''), None) is not None:
            await self._save_email_index(index)
        return await self.storage.delete(f"{self.users_dir}/{user_id}.json")


# Global user storage instance
_user_storage: Optional[UserStorage] = None


def init_user_storage(storage: Optional[StorageInterface] = None) -> UserStorage:
    """
    Initialize the global user storage instance.

    Args:
        storage: Optional StorageInterface implementation. If None, creates LocalStorage.
    """
    global _user_storage
    if storage is None:
        storage = LocalStorage()
    _user_storage = UserStorage(storage)
    return _user_storage


def get_user_storage() -> UserStorage:
    """
    Raises:
        RuntimeError: If user storage has not been initialized
    """
    if _user_storage is None:
        raise RuntimeError("User storage not initialized. Call init_user_storage() first.")
    return _user_storage
