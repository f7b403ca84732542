"""
FastAPI dependencies (DB session, current owner)
"""
from habitgrid.config import get_settings
from habitgrid.infrastructure.db.session import get_db as _get_db


# Re-export get_db for convenience
get_db = _get_db


def get_current_owner() -> str:
    """
    Owner every request acts as.

    There is no authentication yet: all requests share the placeholder
    identity from Settings.DEFAULT_OWNER_ID.

    Usage:
        @router.get("/habits")
        def list_habits(owner_id: str = Depends(get_current_owner)):
            ...
    """
    return get_settings().DEFAULT_OWNER_ID
