"""Acting user identity.

Authentication happens upstream; the gateway forwards the authenticated
user's ID in the X-User-Id header.
"""

from uuid import UUID

from fastapi import Header, HTTPException, status


def acting_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """Read the acting user's ID from the request.

    Returns:
        The user ID, None for anonymous requests

    Raises:
        HTTPException: If the header is not a valid UUID
    """
    if not x_user_id:
        return None
    try:
        return str(UUID(x_user_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-User-Id must be a UUID",
        )
