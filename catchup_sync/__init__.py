"""
Catch-up sync

Mirrors a radio station's catch-up episodes to local storage and keeps a
merged broadcast schedule index.
"""
__version__ = "0.1.0"
