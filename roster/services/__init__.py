"""
High-level entry points for the roster backend.

Routers and scripts call StorageService instead of addressing the repositories
or the key-value store directly.
"""
