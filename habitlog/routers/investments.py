"""
Investments router.

POST   /investments/goals
GET    /investments/goals
PATCH  /investments/goals/{goal_id}
DELETE /investments/goals/{goal_id}
GET    /investments/goals/{goal_id}/progress
GET    /investments/progress
POST   /investments/entries
GET    /investments/entries
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from habitlog.core.principal import get_principal
from habitlog.db.base import get_db
from habitlog.routers.serializers import goal_to_response, investment_entry_to_response
from habitlog.schemas.investment import (
    GoalCreateRequest,
    GoalListResponse,
    GoalProgressResponse,
    GoalResponse,
    GoalUpdateRequest,
    InvestmentEntryListResponse,
    InvestmentEntryRequest,
    InvestmentEntryResponse,
    TotalProgressResponse,
)
from habitlog.services import investments as svc

router = APIRouter(prefix="/investments", tags=["investments"])


@router.post("/goals", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(
    payload: GoalCreateRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    goal = svc.create_goal(db, owner, payload.asset, payload.currently_held, payload.target)
    return goal_to_response(goal)


@router.get("/goals", response_model=GoalListResponse)
def list_goals(db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    items = [goal_to_response(g) for g in svc.list_goals(db, owner)]
    return GoalListResponse(total=len(items), items=items)


@router.patch(
    "/goals/{goal_id}",
    response_model=GoalResponse,
    responses={404: {"description": "Unknown goal."}},
)
def update_goal(
    goal_id: int,
    payload: GoalUpdateRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    goal = svc.update_goal(db, owner, goal_id, payload.currently_held, payload.target)
    return goal_to_response(goal)


@router.delete(
    "/goals/{goal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={204: {"description": "Deleted, or already absent."}},
)
def delete_goal(goal_id: int, db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    svc.delete_goal(db, owner, goal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/goals/{goal_id}/progress", response_model=GoalProgressResponse)
def goal_progress(goal_id: int, db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    """`progress` is null for an unknown goal."""
    return GoalProgressResponse(goal_id=goal_id, progress=svc.get_goal_progress(db, owner, goal_id))


@router.get("/progress", response_model=TotalProgressResponse, summary="Mean progress across goals")
def total_progress(db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    return TotalProgressResponse(
        goals=len(svc.list_goals(db, owner)),
        progress=svc.total_goals_progress(db, owner),
    )


@router.post("/entries", response_model=InvestmentEntryResponse, status_code=status.HTTP_201_CREATED)
def add_entry(
    payload: InvestmentEntryRequest,
    db: Session = Depends(get_db),
    owner: str = Depends(get_principal),
):
    entry = svc.add_investment_entry(
        db, owner, payload.date, payload.asset, payload.amount, payload.notes
    )
    return investment_entry_to_response(entry)


@router.get("/entries", response_model=InvestmentEntryListResponse, summary="Newest first")
def list_entries(db: Session = Depends(get_db), owner: str = Depends(get_principal)):
    items = [investment_entry_to_response(e) for e in svc.list_investment_entries(db, owner)]
    return InvestmentEntryListResponse(total=len(items), items=items)
