"""
Request-scoped dependencies shared by the routers.

The authentication collaborator sits in front of this service and forwards
a stable, opaque user id in `X-User-Id`. It is trusted as-is; no credential
checks happen here.
"""
from datetime import date
from typing import Annotated, Optional

from fastapi import Header, Query

from question_diary.core.clock import reference_today
from question_diary.core.errors import MissingUserContextError


def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header(alias="X-User-Id")] = None,
) -> str:
    if x_user_id is None or not x_user_id.strip():
        raise MissingUserContextError()
    return x_user_id.strip()


def get_reference_date(
    reference_date: Optional[date] = Query(
        default=None,
        description="Canonical 'today'. Defaults to today in the reference timezone.",
        examples=["2026-02-21"],
    ),
) -> date:
    """Resolve 'today' once per request; services never read the clock."""
    return reference_date or reference_today()
