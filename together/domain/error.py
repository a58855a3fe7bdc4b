"""Domain layer errors.

Every pairing and unbind outcome that a user can run into is a subclass of
DomainError; the interface layer maps each one to a status code and a stable
error code.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SpaceNotFoundError(NotFoundError):
    """Raised when a space does not exist (or no longer exists)."""

    def __init__(self, identifier: str):
        super().__init__("Space", identifier)


class InviteCodeNotFoundError(NotFoundError):
    """Raised when an invite code was never minted or has been retired."""

    def __init__(self, code: str):
        super().__init__("Invite code", code)


class AlreadyInSpaceError(DomainError):
    """Raised when a member of one space tries to create or join another."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is already in a space")


class SpaceFullError(DomainError):
    """Raised when a space already has two partners."""

    def __init__(self, space_id: str):
        self.space_id = space_id
        super().__init__(f"Space {space_id} already has two partners")


class AlreadyPairedError(DomainError):
    """Benign outcome: the user is already a partner of this paired space.

    Carries the current space so callers can answer a retried join with it.
    """

    def __init__(self, space):
        self.space = space
        super().__init__(f"User is already paired in space {space.id}")


class SelfJoinError(DomainError):
    """Raised when the creator of a space redeems their own invite code."""

    def __init__(self):
        super().__init__("You cannot join your own space")


class InvalidCodeError(DomainError):
    """Raised when an invite code does not resolve to a joinable space."""

    def __init__(self, message: str = "Invalid invite code"):
        super().__init__(message)


class NotSpaceMemberError(DomainError):
    """Raised when a user acts on a space they are not a partner of."""

    def __init__(self, space_id: str, user_id: str):
        self.space_id = space_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not a member of space {space_id}")


class NotPairedError(DomainError):
    """Raised when an operation needs two partners but the space has one."""

    def __init__(self, space_id: str):
        self.space_id = space_id
        super().__init__(f"Space {space_id} does not have two partners yet")


class AlreadyPendingError(DomainError):
    """Benign outcome: an unbind request is already pending for the space.

    Carries the existing request so callers can return it instead of a duplicate.
    """

    def __init__(self, request):
        self.request = request
        super().__init__(f"Unbind request {request.id} is already pending")


class NoPendingRequestError(DomainError):
    """Raised when there is no pending unbind request to act on."""

    def __init__(self, space_id: str):
        self.space_id = space_id
        super().__init__(f"No pending unbind request for space {space_id}")


class ConflictError(DomainError):
    """Raised by repositories when a write violates a uniqueness constraint."""

    pass


class ServiceUnavailableError(DomainError):
    """Raised when storage keeps failing after bounded retries."""

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)
