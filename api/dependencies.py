"""
FastAPI dependencies for dependency injection.

Provides the singleton request dispatcher to route handlers.
"""

from typing import Optional

from manager.dispatcher import RequestDispatcher


# Global singleton (set during app lifespan)
_dispatcher: Optional[RequestDispatcher] = None


def set_dispatcher(dispatcher: Optional[RequestDispatcher]) -> None:
    """Set the global dispatcher instance."""
    global _dispatcher
    _dispatcher = dispatcher


async def get_dispatcher() -> RequestDispatcher:
    """
    Dependency that provides the dispatcher.

    Usage:
        @router.get("/items")
        async def list_items(
            dispatcher: RequestDispatcher = Depends(get_dispatcher)
        ):
            ...
    """
    if _dispatcher is None:
        raise RuntimeError("Dispatcher not initialized")
    return _dispatcher
