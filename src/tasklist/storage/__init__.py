"""
Storage subsystem.

Components:
- sqlite_storage.py: SQLite-backed key-value string store (default)
- file_storage.py: JSON-file and in-memory key-value string stores
- slot.py: StorageSlot (one fixed key, never raises) + backend factory
"""
