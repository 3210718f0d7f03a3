"""Mapping between `Recipe` and the document stored for it.

The document carries the same field names as the external shape, except the
identifier, which lives in Mongo's `_id` primary key and is never written as
an ordinary field.
"""

from typing import Any, Mapping, TypeAlias

from bson import ObjectId

from domain.models import Ingredient, Recipe, Step


Document: TypeAlias = dict[str, Any]


DECODE_ERRORS = (KeyError, TypeError, ValueError)


def ingredient_document(ingredient: Ingredient) -> Document:
    return {
        "qty": ingredient.qty,
        "unit": ingredient.unit,
        "name": ingredient.name,
    }


def step_document(step: Step) -> Document:
    return {"order": step.order, "description": step.description}


def recipe_fields(recipe: Recipe) -> Document:
    """Every stored field of the recipe. Used for inserts and for `$set` on update."""
    return {
        "name": recipe.name,
        "description": recipe.description,
        "favorite": recipe.favorite,
        "ingredients": [ingredient_document(i) for i in recipe.ingredients],
        "directions": [step_document(s) for s in recipe.directions],
    }


def recipe_from_document(document: Mapping[str, Any]) -> Recipe:
    """Rebuild a recipe. Raises one of `DECODE_ERRORS` for a malformed document."""
    _id = document["_id"]
    if not isinstance(_id, ObjectId):
        raise TypeError(f"_id must be an ObjectId, got {type(_id).__name__}")
    data = {k: v for k, v in document.items() if k != "_id"}
    data["id"] = str(_id)
    return Recipe.from_dict(data)
