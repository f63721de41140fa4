"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when the acting user's identity is missing."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when the acting user may not modify a resource."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class CounterUnderflowError(DomainError):
    """Raised when a counter delta would drive a vote counter below zero.

    Signals that the vote ledger and the denormalized counters are out of
    sync. The counter mutation is aborted, never clamped.
    """

    def __init__(self, post_id: str, increments: dict[str, int]):
        self.post_id = post_id
        self.increments = increments
        super().__init__(
            f"Counter underflow on post {post_id} applying {increments}"
        )


class GenerationFailure(DomainError):
    """Raised when the summary generator fails to produce a summary."""

    pass


class NotificationDispatchError(DomainError):
    """Raised when a notification record cannot be written."""

    pass
