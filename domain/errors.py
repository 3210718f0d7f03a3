from enum import Enum


class ErrorKind(Enum):
    invalid_identifier = "invalid_identifier"
    not_found = "not_found"
    storage_read = "storage_read"
    storage_write = "storage_write"
    identifier_format = "identifier_format"


class RecipeRepositoryError(Exception):
    """Base for everything the recipe repository raises.

    Callers branch on `kind` (or the subclass), never on the message. The
    driver exception, when there is one, is chained as `__cause__`.
    """

    kind: ErrorKind

    def __init__(
        self,
        op: str,
        *,
        recipe_id: str | None = None,
        detail: str = "",
    ) -> None:
        self.op = op
        self.recipe_id = recipe_id
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"{self.op}: {self.kind.value}"
        if self.recipe_id is not None:
            msg += f" (recipe {self.recipe_id!r})"
        if self.detail:
            msg += f": {self.detail}"
        return msg

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class InvalidIdentifierError(RecipeRepositoryError):
    kind = ErrorKind.invalid_identifier


class NotFoundError(RecipeRepositoryError):
    kind = ErrorKind.not_found


class StorageReadError(RecipeRepositoryError):
    kind = ErrorKind.storage_read


class StorageWriteError(RecipeRepositoryError):
    kind = ErrorKind.storage_write


class IdentifierFormatError(RecipeRepositoryError):
    kind = ErrorKind.identifier_format
