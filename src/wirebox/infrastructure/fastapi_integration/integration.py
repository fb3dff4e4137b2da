from typing import Any, Callable

from fastapi import Depends

from wirebox.domain import IContainer


def create_fastapi_dependency(container: IContainer, id: Any) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves an id with ``container.get``.

    Classes resolve to the container's shared instance, factories run on every
    request.

    Args:
        container: The DI container to resolve from.
        id: The id to resolve when the dependency is called.

    Returns:
        A zero-argument callable that FastAPI can use with Depends().

    Example:
        >>> container = DIContainer()
        >>> container.set(UserRepository).set_param(DatabaseConnection)
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the dependency from the container."""
        return container.get(id)

    return dependency


def create_fresh_dependency(container: IContainer, id: Any) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that builds a new instance per call with ``container.make``.

    Args:
        container: The DI container to build from.
        id: An id whose definition is a class.

    Returns:
        A zero-argument callable that FastAPI can use with Depends().

    Example:
        >>> get_request_context = create_fresh_dependency(container, RequestContext)
        >>>
        >>> @app.get("/process")
        >>> async def process(ctx: RequestContext = Depends(get_request_context)):
        ...     return {"request_id": ctx.request_id}
    """

    def fresh_dependency() -> Any:
        """Build a new instance from the container."""
        return container.make(id)

    return fresh_dependency


def provide(container: IContainer, id: Any, fresh: bool = False) -> Any:
    """Shortcut for ``Depends(create_fastapi_dependency(container, id))``.

    Args:
        container: The DI container to resolve from.
        id: The id to resolve.
        fresh: Build a new instance per request with ``make`` instead of ``get``.

    Example:
        >>> @app.get("/mail")
        >>> def send(mailer: Mailer = provide(container, Mailer)):
        ...     mailer.send("a@b.com", "hi")
    """
    if fresh:
        return Depends(create_fresh_dependency(container, id))
    return Depends(create_fastapi_dependency(container, id))
