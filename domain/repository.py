import asyncio
import logging
from typing import Any, Mapping

from bson.errors import BSONError
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ajolt import AsyncJolt
from domain.documents import (
    DECODE_ERRORS,
    Document,
    recipe_fields,
    recipe_from_document,
)
from domain.errors import (
    IdentifierFormatError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
)
from domain.identifiers import format_id, parse_id
from domain.models import Recipe


logger = logging.getLogger(__name__)


DRIVER_ERRORS = (PyMongoError, BSONError)


# BSON encoding happens client side. Integers outside int64 and strings with
# lone surrogates fail there with plain Python errors.
WRITE_ERRORS = DRIVER_ERRORS + (OverflowError, UnicodeEncodeError)

def _decode(document: Mapping[str, Any], *, op: str) -> Recipe:
    try:
        return recipe_from_document(document)
    except DECODE_ERRORS as exc:
        _id = document.get("_id")
        logger.warning("Could not decode recipe document %s: %r", _id, exc)
        raise StorageReadError(
            op,
            recipe_id=None if _id is None else str(_id),
            detail="failed to decode recipe",
        ) from exc


class RecipeRepository:
    """CRUD for recipes over a single Mongo collection.

    The collection is bound once, here, and never swapped. pymongo collections
    are thread safe, so one repository can serve any number of tasks. Blocking
    driver calls run in a worker thread; cancelling the awaiting task or
    wrapping it in `asyncio.timeout()` abandons the wait, and a deadline set
    with `pymongo.timeout()` is enforced by the driver itself, since
    `asyncio.to_thread` carries the caller's contextvars into the thread.
    """

    def __init__(self, collection: Collection[Document]) -> None:
        self._collection = collection

    @classmethod
    def from_database(
        cls,
        db: Database[Document],
        *,
        collection_name: str = "recipes",
    ) -> "RecipeRepository":
        return cls(db.get_collection(collection_name))

    @property
    def collection(self) -> Collection[Document]:
        return self._collection

    async def create(self, recipe: Recipe) -> Recipe:
        """Insert the whole aggregate and fill in the id storage assigned.

        The same `recipe` object is returned. Any id it already carried is
        ignored; storage always assigns a fresh one.
        """
        logger.debug("Creating recipe %r", recipe.name)
        try:
            async with AsyncJolt():
                result = await asyncio.to_thread(
                    self._collection.insert_one, recipe_fields(recipe)
                )
            inserted_id = result.inserted_id
        except WRITE_ERRORS as exc:
            logger.warning("Insert of recipe %r failed: %r", recipe.name, exc)
            raise StorageWriteError("create", detail="failed to insert recipe") from exc

        try:
            recipe.id = format_id(inserted_id, op="create")
        except IdentifierFormatError:
            logger.error("Recipe %r stored under unusable id %r", recipe.name, inserted_id)
            raise

        logger.info("Created recipe %s", recipe.id)
        return recipe

    async def get(self, recipe_id: str) -> Recipe:
        oid = parse_id(recipe_id, op="get")
        logger.debug("Getting recipe %s", recipe_id)
        try:
            async with AsyncJolt():
                document = await asyncio.to_thread(
                    self._collection.find_one, {"_id": oid}
                )
        except DRIVER_ERRORS as exc:
            logger.warning("Find of recipe %s failed: %r", recipe_id, exc)
            raise StorageReadError(
                "get", recipe_id=recipe_id, detail="failed to get recipe"
            ) from exc

        if document is None:
            raise NotFoundError("get", recipe_id=recipe_id)

        return _decode(document, op="get")

    async def get_all(self) -> list[Recipe]:
        """Every recipe, in whatever order the collection yields them.

        One undecodable document fails the whole call.
        """
        logger.debug("Listing recipes")
        try:
            async with AsyncJolt():
                documents = await asyncio.to_thread(self._find_all)
        except DRIVER_ERRORS as exc:
            logger.warning("Listing recipes failed: %r", exc)
            raise StorageReadError("get_all", detail="failed to list recipes") from exc

        return [_decode(d, op="get_all") for d in documents]

    async def update(self, recipe: Recipe) -> None:
        """Replace name, description, favorite, ingredients and directions.

        Not a merge: whatever the recipe holds, empty lists included, is what
        gets stored.
        """
        oid = parse_id(recipe.id, op="update")
        logger.debug("Updating recipe %s", recipe.id)
        try:
            async with AsyncJolt():
                result = await asyncio.to_thread(
                    self._collection.update_one,
                    {"_id": oid},
                    {"$set": recipe_fields(recipe)},
                )
            matched = result.matched_count
        except WRITE_ERRORS as exc:
            logger.warning("Update of recipe %s failed: %r", recipe.id, exc)
            raise StorageWriteError(
                "update", recipe_id=recipe.id, detail="failed to update recipe"
            ) from exc

        if matched == 0:
            raise NotFoundError("update", recipe_id=recipe.id)

        logger.info("Updated recipe %s", recipe.id)

    async def delete(self, recipe_id: str) -> None:
        oid = parse_id(recipe_id, op="delete")
        logger.debug("Deleting recipe %s", recipe_id)
        try:
            async with AsyncJolt():
                result = await asyncio.to_thread(
                    self._collection.delete_one, {"_id": oid}
                )
            deleted = result.deleted_count
        except DRIVER_ERRORS as exc:
            logger.warning("Delete of recipe %s failed: %r", recipe_id, exc)
            raise StorageWriteError(
                "delete", recipe_id=recipe_id, detail="failed to delete recipe"
            ) from exc

        if deleted == 0:
            raise NotFoundError("delete", recipe_id=recipe_id)

        logger.info("Deleted recipe %s", recipe_id)

    def _find_all(self) -> list[Document]:
        return list(self._collection.find({}))
