"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Sequence
from uuid import UUID

from together.domain.model import InviteCodeRecord, Space, UnbindRequest, User
from together.domain.value import (
    InviteCode,
    InviteCodeStatus,
    Nickname,
    SpaceId,
    UnbindRequestId,
    UnbindStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_space(row: Dict[str, Any], partners: Sequence[Any]) -> Space:
    """Convert a spaces row and its ordered member ids to a Space.

    Args:
        row: spaces row as dict
        partners: user ids ordered by position

    Returns:
        Space domain model
    """
    return Space(
        id=SpaceId(_uuid(row["id"])),
        anniversary_date=row["anniversary_date"],
        partners=tuple(UserId(_uuid(p)) for p in partners),
        invite_code=InviteCode(row["invite_code"]) if row.get("invite_code") else None,
        version=row["version"],
        created_at=row["created_at"],
    )


def space_to_dict(space: Space) -> Dict[str, Any]:
    """Convert a Space to a spaces row (members are stored separately)."""
    return {
        "id": space.id,
        "anniversary_date": space.anniversary_date,
        "invite_code": space.invite_code.root if space.invite_code else None,
        "member_count": len(space.partners),
        "version": space.version,
        "created_at": space.created_at,
    }


def row_to_invite_code(row: Dict[str, Any]) -> InviteCodeRecord:
    return InviteCodeRecord(
        code=InviteCode(row["code"]),
        space_id=SpaceId(_uuid(row["space_id"])),
        status=InviteCodeStatus(row["status"]),
        created_at=row["created_at"],
        retired_at=row.get("retired_at"),
    )


def invite_code_to_dict(record: InviteCodeRecord) -> Dict[str, Any]:
    return {
        "code": record.code.root,
        "space_id": record.space_id,
        "status": record.status.value,
        "created_at": record.created_at,
        "retired_at": record.retired_at,
    }


def row_to_unbind_request(row: Dict[str, Any]) -> UnbindRequest:
    """Convert database row to UnbindRequest domain model.

    Args:
        row: Database row as dict

    Returns:
        UnbindRequest domain model
    """
    return UnbindRequest(
        id=UnbindRequestId(_uuid(row["id"])),
        space_id=SpaceId(_uuid(row["space_id"])),
        requested_by=UserId(_uuid(row["requested_by"])),
        requested_at=row["requested_at"],
        expires_at=row["expires_at"],
        status=UnbindStatus(row["status"]),
        resolved_at=row.get("resolved_at"),
        resolved_by=(
            UserId(_uuid(row["resolved_by"])) if row.get("resolved_by") else None
        ),
        version=row["version"],
    )


def unbind_request_to_dict(request: UnbindRequest) -> Dict[str, Any]:
    data = request.model_dump()
    data["status"] = request.status.value
    return data


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        nickname=Nickname(row["nickname"]) if row.get("nickname") else None,
        avatar_url=row.get("avatar_url"),
        email=row.get("email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    # Nickname serializes to its plain string via RootModel
    return user.model_dump()
