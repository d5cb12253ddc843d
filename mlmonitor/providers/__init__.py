"""Concrete store implementations.

- sqlite/  - aiosqlite-backed stores sharing one ``SQLiteDatabase`` handle
- memory/  - lock-guarded in-memory stores sharing one ``MemoryDatabase``
"""
