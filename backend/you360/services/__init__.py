"""Services module - clients for external collaborators."""

from .auth_client import AuthClient, AuthSession, AuthError

__all__ = ['AuthClient', 'AuthSession', 'AuthError']
