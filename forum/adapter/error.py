"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class StoreUnavailableError(AdapterError):
    """Transient document store failure.

    Safe to retry the whole vote submission: vote records are keyed by
    (post, voter) so a repeated write lands on the same document.
    """

    pass
