from __future__ import annotations

from fastapi import APIRouter, Request

from roster.domain.results import ErrorKind
from roster.routers.responses import error_response, failure_response, get_storage, not_found
from roster.services.payloads import PayloadError, lineup_from_payload, lineup_to_dict

router = APIRouter(prefix="/api/lineups", tags=["lineups"])


@router.get("/{lineup_id}")
def get_lineup(lineup_id: str, request: Request):
    lineup = get_storage(request).lineup.get_lineup(lineup_id)
    if lineup is None:
        return not_found("Lineup not found")
    return {"ok": True, "lineup": lineup_to_dict(lineup)}


@router.put("/{lineup_id}")
def save_lineup(lineup_id: str, payload: dict, request: Request):
    try:
        lineup = lineup_from_payload(payload, lineup_id=lineup_id)
    except PayloadError as exc:
        return error_response(ErrorKind.VALIDATION, str(exc))
    result = get_storage(request).lineup.save_lineup(lineup)
    if not result:
        return failure_response(result)
    return {"ok": True, "lineup": lineup_to_dict(result.value)}


@router.delete("/{lineup_id}")
def delete_lineup(lineup_id: str, request: Request):
    result = get_storage(request).lineup.delete_lineup(lineup_id)
    if not result:
        return failure_response(result)
    return {"ok": True}
