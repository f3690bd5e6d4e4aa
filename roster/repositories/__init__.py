"""
Persistence adapters.

Key-value adapters (memory, file, SQL) plus the team and lineup repositories
that build entity guarantees on top of them. Services depend on these
repositories rather than touching the store directly.
"""
