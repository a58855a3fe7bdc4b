"""Invite code parsing shared by pairing use cases."""

from together.domain.error import InvalidCodeError
from together.domain.value import InviteCode


def parse_invite_code(raw: str) -> InviteCode:
    """Normalize user input into an InviteCode.

    Raises:
        InvalidCodeError: If the input cannot be a code at all
    """
    try:
        return InviteCode(raw)
    except ValueError:
        raise InvalidCodeError()
