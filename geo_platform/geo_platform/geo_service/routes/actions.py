"""
Actions Router - user interaction event logging.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..deps import get_actions_service, get_current_user, require_admin
from ..models import User
from ..schemas import ActionOut, ActionRecord, ActionsFilter
from ..services.actions_service import ActionsService

router = APIRouter(prefix="/actions", tags=["actions"])


@router.post("", status_code=status.HTTP_201_CREATED)
def record_action(
    record: ActionRecord,
    user: User = Depends(get_current_user),
    service: ActionsService = Depends(get_actions_service),
):
    service.record_action(user, record)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=List[ActionOut])
def select_actions(
    limit: int = Query(..., ge=1, description="Maximum number of actions to return"),
    search: Optional[str] = Query(None, description="Filter by substring of the owner's username"),
    _admin: dict = Depends(require_admin),
    service: ActionsService = Depends(get_actions_service),
):
    actions = service.select_actions(ActionsFilter(limit=limit, search=search))
    return [action.to_dict() for action in actions]


@router.delete("/{action_id}")
def remove_action(
    action_id: str,
    _admin: dict = Depends(require_admin),
    service: ActionsService = Depends(get_actions_service),
):
    return service.remove_action(action_id)
