"""
Core utilities shared across the roster package.

Configuration helpers (env vars, storage paths) and logging setup live here so
repositories/services never read os.environ directly.
"""
