"""Domain types for teams and lineups (no storage concerns)."""
