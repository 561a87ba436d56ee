"""Storage module - provides interface and implementations for data persistence."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .user_storage import UserStorage, init_user_storage, get_user_storage
from .recipe_storage import LastRecipeStore, LAST_RECIPE_KEY

__all__ = [
    'StorageInterface', 'LocalStorage', 'UserStorage', 'init_user_storage', 'get_user_storage',
    'LastRecipeStore', 'LAST_RECIPE_KEY',
]
