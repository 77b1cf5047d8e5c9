"""Shared dependencies for web routes."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Rate limiter shared by the app and its routes
limiter = Limiter(key_func=get_remote_address)
