"""
Investment goals and the investment contribution diary.

Progress for a goal = min(100, currently_held / target * 100), 0 when the
target is 0.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from habitlog.core.errors import InvestmentGoalNotFoundError, ValidationFailedError
from habitlog.models.investment import InvestmentDiaryEntry, InvestmentGoal
from habitlog.services.stats import round_percent
from habitlog.services.units import MAX_AMOUNT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _clean_asset(asset: Any) -> str:
    cleaned = asset.strip() if isinstance(asset, str) else ""
    if not cleaned:
        raise ValidationFailedError("asset must not be empty.", field="asset")
    return cleaned


def _non_negative(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_AMOUNT:
        raise ValidationFailedError(
            f"{field} must be an integer between 0 and {MAX_AMOUNT}.", field=field, value=value
        )
    return value


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def goal_progress(currently_held: int, target: int) -> float:
    if target <= 0:
        return 0.0
    return min(100.0, currently_held / target * 100)


def get_goal_progress(db: Session, owner: str, goal_id: int) -> Optional[int]:
    goal = _find_goal(db, owner, goal_id)
    if goal is None:
        return None
    return round_percent(goal_progress(goal.currently_held, goal.target))


def total_goals_progress(db: Session, owner: str) -> int:
    """Mean progress across all goals, 0 when there are none."""
    goals = list_goals(db, owner)
    if not goals:
        return 0
    mean = sum(goal_progress(g.currently_held, g.target) for g in goals) / len(goals)
    return round_percent(mean)


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

def _find_goal(db: Session, owner: str, goal_id: int) -> Optional[InvestmentGoal]:
    return (
        db.query(InvestmentGoal)
        .filter(InvestmentGoal.id == goal_id, InvestmentGoal.owner == owner)
        .first()
    )


def list_goals(db: Session, owner: str) -> list[InvestmentGoal]:
    return (
        db.query(InvestmentGoal)
        .filter(InvestmentGoal.owner == owner)
        .order_by(InvestmentGoal.id)
        .all()
    )


def create_goal(
    db: Session, owner: str, asset: str, currently_held: int, target: int
) -> InvestmentGoal:
    goal = InvestmentGoal(
        owner=owner,
        asset=_clean_asset(asset),
        currently_held=_non_negative(currently_held, "currently_held"),
        target=_non_negative(target, "target"),
    )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    logger.info("Created investment goal %s (%s) for %s", goal.id, goal.asset, owner)
    return goal


def update_goal(
    db: Session, owner: str, goal_id: int, currently_held: int, target: int
) -> InvestmentGoal:
    held = _non_negative(currently_held, "currently_held")
    tgt = _non_negative(target, "target")
    goal = _find_goal(db, owner, goal_id)
    if goal is None:
        raise InvestmentGoalNotFoundError(goal_id)
    goal.currently_held = held
    goal.target = tgt
    db.commit()
    db.refresh(goal)
    return goal


def delete_goal(db: Session, owner: str, goal_id: int) -> bool:
    goal = _find_goal(db, owner, goal_id)
    if goal is None:
        logger.debug("delete_goal: %s already absent for %s", goal_id, owner)
        return False
    db.delete(goal)
    db.commit()
    logger.info("Deleted investment goal %s for %s", goal_id, owner)
    return True


# ---------------------------------------------------------------------------
# Investment diary
# ---------------------------------------------------------------------------

def add_investment_entry(
    db: Session, owner: str, date_ns: int, asset: str, amount: int, notes: str = ""
) -> InvestmentDiaryEntry:
    entry = InvestmentDiaryEntry(
        owner=owner,
        date=_non_negative(date_ns, "date"),
        asset=_clean_asset(asset),
        amount=_non_negative(amount, "amount"),
        notes=notes or "",
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_investment_entries(db: Session, owner: str) -> list[InvestmentDiaryEntry]:
    return (
        db.query(InvestmentDiaryEntry)
        .filter(InvestmentDiaryEntry.owner == owner)
        .order_by(InvestmentDiaryEntry.date.desc(), InvestmentDiaryEntry.id.desc())
        .all()
    )
