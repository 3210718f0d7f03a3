from unittest import mock

import bson
import mongomock
import pytest

from domain.models import Ingredient, Recipe, Step
from domain.repository import RecipeRepository


@pytest.fixture
def collection() -> mongomock.Collection:
    return mongomock.MongoClient().get_database("test_recipes").get_collection("recipes")


@pytest.fixture
def repo(collection: mongomock.Collection) -> RecipeRepository:
    return RecipeRepository(collection)  # pyright: ignore[reportArgumentType]


@pytest.fixture
def sample_recipes() -> list[Recipe]:
    return [
        Recipe(
            name="Test Recipe 1",
            description="This is a test recipe 1.",
            favorite=True,
            ingredients=[
                Ingredient(qty=100, unit="g", name="Ingredient 1"),
                Ingredient(qty=50, unit="ml", name="Ingredient 2"),
            ],
            directions=[
                Step(order=1, description="Step 1"),
                Step(order=2, description="Step 2"),
            ],
        ),
        Recipe(
            name="Test Recipe 2",
            description="This is a test recipe 2.",
            ingredients=[
                Ingredient(qty=200, unit="g", name="Ingredient 1"),
                Ingredient(qty=75, unit="ml", name="Ingredient 2"),
            ],
            directions=[
                Step(order=1, description="Step 1"),
                Step(order=2, description="Step 2"),
                Step(order=3, description="Step 3"),
            ],
        ),
    ]


@pytest.fixture
def encoding() -> mock.Mock:
    """A collection that encodes its input to BSON first, as the driver does."""
    collection = mock.Mock()
    collection.insert_one.side_effect = lambda document: bson.encode(document)
    collection.update_one.side_effect = lambda filter, update: bson.encode(update)
    return collection
