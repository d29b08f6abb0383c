from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..deps import get_store
from ..errors import NotFoundError, StoreError, ValidationError
from ..logs import LogContext
from ..services.activity_store import ActivityStore
from ..services.activity_svc import (
    list_activities,
    get_activity,
    create_activity,
    update_activity,
    delete_activity,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/activities", tags=["Activities"])


class ActivityBody(BaseModel):
    # all optional here so a missing field is a 400 from the service, not a 422
    name: Optional[str] = None
    startDate: Optional[str] = None
    duration: Optional[str] = None


def _store_failure(log: LogContext, what: str) -> HTTPException:
    logger.exception("store error while %s", what)
    log.write("ERROR", "store error")
    return HTTPException(status_code=500, detail=f"internal error while {what}")


@router.get(
    "",
    summary="List activities",
    description="Return every activity, optionally filtered by name and capped by 'limit'.",
    responses={400: {"description": "Search string shorter than 3 characters"}, 500: {"description": "Server error"}},
)
def api_activities_list(
    name: Optional[str] = Query(None, description="Filter by name (at least 3 characters)"),
    limit: Optional[str] = Query(None, description="Maximum number of results (positive integer)"),
    store: ActivityStore = Depends(get_store),
):
    log = LogContext("LIST_ACTIVITIES")
    log.set_payload({"name": name, "limit": limit})
    try:
        items = list_activities(store, name, limit)
        log.write("OK")
        return {"activities": items}
    except ValidationError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError:
        raise _store_failure(log, "fetching activities")


@router.get(
    "/{activity_id}",
    summary="Get one activity",
    responses={400: {"description": "Invalid id"}, 404: {"description": "Activity not found"}},
)
def api_activities_get(activity_id: str, store: ActivityStore = Depends(get_store)):
    log = LogContext("GET_ACTIVITY")
    log.set_entity(activity_id)
    try:
        item = get_activity(store, activity_id)
        log.write("OK")
        return {"activity": item}
    except ValidationError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError:
        raise _store_failure(log, "fetching the activity")


@router.post(
    "",
    status_code=201,
    summary="Create an activity",
    responses={400: {"description": "Missing fields"}, 500: {"description": "Server error"}},
)
def api_activities_create(body: ActivityBody, store: ActivityStore = Depends(get_store)):
    log = LogContext("CREATE_ACTIVITY")
    log.set_payload(body.model_dump())
    try:
        item = create_activity(store, body.model_dump())
        log.set_entity(item["id"])
        log.write("OK")
        return {"message": f"The activity {item['name']} has been created!", "activity": item}
    except ValidationError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError:
        raise _store_failure(log, "creating the activity")


@router.put(
    "/{activity_id}",
    summary="Update an activity",
    description="Replace name, startDate and duration of the activity together.",
    responses={
        400: {"description": "Invalid id or missing fields"},
        404: {"description": "Activity not found"},
        500: {"description": "Server error"},
    },
)
def api_activities_update(activity_id: str, body: ActivityBody, store: ActivityStore = Depends(get_store)):
    log = LogContext("UPDATE_ACTIVITY")
    log.set_entity(activity_id)
    log.set_payload(body.model_dump())
    try:
        item = update_activity(store, activity_id, body.model_dump())
        log.write("OK")
        return {"message": "Activity updated", "activity": item}
    except ValidationError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError:
        raise _store_failure(log, "updating the activity")


@router.delete(
    "/{activity_id}",
    summary="Delete an activity",
    responses={
        400: {"description": "Invalid id"},
        404: {"description": "Activity not found"},
        500: {"description": "Server error"},
    },
)
def api_activities_delete(activity_id: str, store: ActivityStore = Depends(get_store)):
    log = LogContext("DELETE_ACTIVITY")
    log.set_entity(activity_id)
    try:
        delete_activity(store, activity_id)
        log.write("OK")
        return {"message": "Activity deleted"}
    except ValidationError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError:
        raise _store_failure(log, "deleting the activity")
