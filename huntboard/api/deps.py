"""
Shared helpers for API routers
"""
from typing import Any, Dict

from fastapi import BackgroundTasks, HTTPException, Request

from huntboard.core.competition import Competition
from huntboard.models import ErrorPolicy, OperationResult


def get_competition(request: Request) -> Competition:
    """Dependency: the Competition built in the app lifespan"""
    return request.app.state.competition


def require_str(payload: dict, *keys: str) -> str:
    """Return the first non-empty string found under ``keys`` or raise 400"""
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    raise HTTPException(status_code=400, detail=f"{keys[0]} required")


def schedule_snapshot(competition: Competition, background_tasks: BackgroundTasks) -> None:
    writer = competition.snapshot_writer
    if writer is not None:
        version, snapshot = competition.store.versioned()
        background_tasks.add_task(writer.write, version, snapshot)


def mutation_response(
    competition: Competition,
    result: OperationResult,
    background_tasks: BackgroundTasks,
    **payload: Any,
) -> Dict[str, Any]:
    """
    Build the response for an engine operation

    Soft policy: rejections answer 200 with applied=false.
    Strict policy: unknown ids answer 404, policy violations 409.
    """
    policy = competition.settings.error_policy

    if not result.applied and policy is ErrorPolicy.STRICT:
        status = 404 if result.reason.is_not_found else 409
        raise HTTPException(status_code=status, detail={
            "success": False,
            "reason": result.reason.value,
            "errorPolicy": policy.value,
        })

    if result.applied:
        schedule_snapshot(competition, background_tasks)

    return {
        "success": True,
        "applied": result.applied,
        "reason": result.reason.value if result.reason else None,
        "errorPolicy": policy.value,
        **payload,
    }
