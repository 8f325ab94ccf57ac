"""
Database module - MongoDB user store.
"""
from user_adapter.database.store import ConnectionState, MotorUserStore

__all__ = [
    "ConnectionState",
    "MotorUserStore",
]
