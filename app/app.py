import contextlib
import logging
from typing import AsyncIterator

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

import config
import db
from domain.errors import ErrorKind, RecipeRepositoryError
from domain.models import Recipe
from domain.repository import RecipeRepository


logger = logging.getLogger(__name__)


CONFIG = config.Config()


STATUS_CODES = {
    ErrorKind.invalid_identifier: 400,
    ErrorKind.not_found: 404,
    ErrorKind.storage_read: 500,
    ErrorKind.storage_write: 500,
    ErrorKind.identifier_format: 500,
}


async def repository_error(request: Request, exc: RecipeRepositoryError) -> JSONResponse:
    status_code = STATUS_CODES[exc.kind]
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        {"error": exc.kind.value, "detail": str(exc)},
        status_code=status_code,
    )


async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": "http", "detail": exc.detail},
        status_code=exc.status_code,
        headers=exc.headers,
    )


async def recipe_from_request(request: Request) -> Recipe:
    try:
        data = await request.json()
        return Recipe.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(400, detail=f"Invalid recipe: {exc!r}") from exc


async def recipes(request: Request) -> Response:
    repo: RecipeRepository = request.app.state.repo
    match request.method.lower():
        case "get":
            found = await repo.get_all()
            return JSONResponse([r.to_dict() for r in found])
        case "post":
            recipe = await repo.create(await recipe_from_request(request))
            return JSONResponse(recipe.to_dict(), status_code=201)
        case _:
            raise ValueError("Unsupported method.")


async def recipe_detail(request: Request) -> Response:
    id = request.path_params["id"]
    repo: RecipeRepository = request.app.state.repo
    match request.method.lower():
        case "get":
            recipe = await repo.get(id)
            return JSONResponse(recipe.to_dict())
        case "put":
            recipe = await recipe_from_request(request)
            # The path decides which recipe is replaced, whatever the body says.
            recipe.id = id
            await repo.update(recipe)
            return JSONResponse(recipe.to_dict())
        case "delete":
            await repo.delete(id)
            return Response(status_code=204)
        case _:
            raise ValueError("Unsupported method.")


def create_app(
    repository: RecipeRepository | None = None,
    *,
    cfg: config.Config | None = None,
) -> Starlette:
    """JSON API over the recipe repository.

    Without a `repository` one is opened from `cfg` for the app's lifetime.
    """
    cfg = CONFIG if cfg is None else cfg

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        if repository is not None:
            yield
            return
        async with db.connect(cfg) as repo:
            app.state.repo = repo
            yield

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/recipes", recipes, methods=["GET", "POST"]),
            Route("/recipes/{id:str}", recipe_detail, methods=["GET", "PUT", "DELETE"]),
        ],
        exception_handlers={  # pyright: ignore[reportArgumentType]
            RecipeRepositoryError: repository_error,
            HTTPException: http_error,
        },
        lifespan=lifespan,
    )
    if repository is not None:
        app.state.repo = repository
    return app


app = create_app()
