"""
FastAPI routers grouped by domain (teams, lineups).

Each module exposes an APIRouter included by roster.app.create_app. Handlers
fetch the StorageService from app.state and never touch the store directly.
"""
