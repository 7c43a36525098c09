# =============================================================================
# core/identity.py - Identity Context Gate
# =============================================================================
# Every service and orchestrator operation receives the caller's identity as
# an explicit argument and passes it through require_subject() before doing
# anything else. There is no global "current user".
# =============================================================================

from app.auth.models import AuthUser
from app.exceptions import UnauthenticatedError


def require_subject(user: AuthUser | None) -> str:
    """
    Return the authenticated subject id, or fail the call.

    Args:
        user: Identity resolved for the current call (None when absent)

    Returns:
        The opaque owner id used for all ownership checks

    Raises:
        UnauthenticatedError: If no identity was resolved
    """
    if user is None or not user.id:
        raise UnauthenticatedError()
    return user.id
