"""Team endpoints, the current-team pointer and team-scoped lineup routes."""
from __future__ import annotations

from fastapi import APIRouter, Request

from roster.domain.results import ErrorKind
from roster.routers.responses import error_response, failure_response, get_storage, not_found
from roster.services.payloads import (
    PayloadError,
    lineup_from_payload,
    lineup_to_dict,
    team_from_payload,
    team_to_dict,
)

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("")
def list_teams(request: Request):
    storage = get_storage(request)
    return {"ok": True, "teams": [team_to_dict(t) for t in storage.team.get_all_teams()]}


@router.post("", status_code=201)
def create_team(payload: dict, request: Request):
    storage = get_storage(request)
    try:
        team = team_from_payload(payload)
    except PayloadError as exc:
        return error_response(ErrorKind.VALIDATION, str(exc))
    result = storage.team.save_team(team)
    if not result:
        return failure_response(result)
    return {"ok": True, "team": team_to_dict(result.value)}


# /current must be registered before /{team_id}
@router.get("/current")
def current_team(request: Request):
    storage = get_storage(request)
    return {"ok": True, "teamId": storage.team.get_current_team_id()}


@router.put("/current")
def select_current_team(payload: dict, request: Request):
    team_id = payload.get("teamId")
    if not team_id or not isinstance(team_id, str):
        return error_response(ErrorKind.VALIDATION, "Team ID is required")
    result = get_storage(request).team.set_current_team_id(team_id)
    if not result:
        return failure_response(result)
    return {"ok": True, "teamId": team_id}


@router.delete("/current")
def clear_current_team(request: Request):
    result = get_storage(request).team.clear_current_team()
    if not result:
        return failure_response(result)
    return {"ok": True, "teamId": None}


@router.get("/{team_id}")
def get_team(team_id: str, request: Request):
    team = get_storage(request).team.get_team(team_id)
    if team is None:
        return not_found("Team not found")
    return {"ok": True, "team": team_to_dict(team)}


@router.put("/{team_id}")
def save_team(team_id: str, payload: dict, request: Request):
    storage = get_storage(request)
    try:
        team = team_from_payload(payload, team_id=team_id)
    except PayloadError as exc:
        return error_response(ErrorKind.VALIDATION, str(exc))
    result = storage.team.save_team(team)
    if not result:
        return failure_response(result)
    return {"ok": True, "team": team_to_dict(result.value)}


@router.delete("/{team_id}")
def delete_team(team_id: str, request: Request):
    result = get_storage(request).team.delete_team(team_id)
    if not result:
        return failure_response(result)
    return {"ok": True}


@router.get("/{team_id}/lineups")
def team_lineups(team_id: str, request: Request):
    storage = get_storage(request)
    if storage.team.get_team(team_id) is None:
        return not_found("Team not found")
    return {"ok": True, "lineups": [lineup_to_dict(item) for item in storage.lineup.load_lineups(team_id)]}


@router.post("/{team_id}/lineups", status_code=201)
def create_lineup(team_id: str, payload: dict, request: Request):
    storage = get_storage(request)
    try:
        lineup = lineup_from_payload(payload, team_id=team_id)
    except PayloadError as exc:
        return error_response(ErrorKind.VALIDATION, str(exc))
    result = storage.lineup.save_lineup(lineup)
    if not result:
        return failure_response(result)
    return {"ok": True, "lineup": lineup_to_dict(result.value)}


@router.get("/{team_id}/lineups/default")
def default_lineup(team_id: str, request: Request):
    lineup = get_storage(request).lineup.get_default_lineup(team_id)
    if lineup is None:
        return not_found("No default lineup for this team")
    return {"ok": True, "lineup": lineup_to_dict(lineup)}


@router.post("/{team_id}/lineups/default")
def set_default_lineup(team_id: str, payload: dict, request: Request):
    lineup_id = payload.get("lineupId")
    if not lineup_id or not isinstance(lineup_id, str):
        return error_response(ErrorKind.VALIDATION, "Lineup ID is required")
    result = get_storage(request).lineup.set_default_lineup(team_id, lineup_id)
    if not result:
        return failure_response(result)
    return {"ok": True, "lineup": lineup_to_dict(result.value)}
