"""Walk a recipe collection through its whole lifecycle against a live MongoDB."""

import asyncio
import logging

from rich import print
from rich.logging import RichHandler

import config
import db
from domain.models import Ingredient, Recipe, Step
from domain.repository import RecipeRepository


CONFIG = config.Config()


def sample_recipes() -> list[Recipe]:
    return [
        Recipe(
            name="Pasta Carbonara",
            description=(
                "Classic Italian pasta dish with eggs, cheese, pancetta, "
                "and black pepper."
            ),
            favorite=True,
            ingredients=[
                Ingredient(qty=200, unit="g", name="Spaghetti"),
                Ingredient(qty=100, unit="g", name="Pancetta"),
                Ingredient(qty=2, name="Eggs"),
                Ingredient(qty=50, unit="g", name="Parmesan Cheese"),
                Ingredient(qty=50, unit="g", name="Pecorino Cheese"),
                Ingredient(qty=1, name="Black Pepper"),
            ],
            directions=[
                Step(order=1, description="Boil spaghetti until al dente."),
                Step(order=2, description="Fry pancetta until crispy."),
                Step(order=3, description="Mix eggs with grated cheeses."),
                Step(order=4, description="Combine everything and add black pepper."),
            ],
        ),
        Recipe(
            name="Caprese Salad",
            description=(
                "Simple and delicious salad with fresh tomatoes, mozzarella, "
                "and basil."
            ),
            ingredients=[
                Ingredient(qty=4, name="Tomatoes"),
                Ingredient(qty=1, name="Mozzarella"),
                Ingredient(qty=1, unit="bunch", name="Basil"),
                Ingredient(qty=2, unit="tbsp", name="Olive Oil"),
                Ingredient(qty=1, unit="tbsp", name="Balsamic Vinegar"),
            ],
            directions=[
                Step(order=1, description="Slice tomatoes and mozzarella."),
                Step(order=2, description="Arrange slices on a plate with basil leaves."),
                Step(order=3, description="Drizzle with olive oil and balsamic vinegar."),
            ],
        ),
        Recipe(
            name="Chocolate Cake",
            description="Decadent chocolate cake with rich frosting.",
            favorite=True,
            ingredients=[
                Ingredient(qty=200, unit="g", name="Flour"),
                Ingredient(qty=50, unit="g", name="Cocoa Powder"),
                Ingredient(qty=200, unit="g", name="Sugar"),
                Ingredient(qty=200, unit="g", name="Butter"),
                Ingredient(qty=4, name="Eggs"),
            ],
            directions=[
                Step(order=1, description="Mix dry ingredients (flour, cocoa powder, sugar)."),
                Step(order=2, description="Cream butter and sugar, then add eggs one by one."),
                Step(order=3, description="Fold in the dry ingredients."),
                Step(order=4, description="Bake in preheated oven."),
            ],
        ),
    ]


async def show_all(repo: RecipeRepository, title: str) -> None:
    print(f"[bold]{title}[/bold]")
    for recipe in await repo.get_all():
        print(str(recipe))


async def demo(repo: RecipeRepository) -> None:
    created: list[Recipe] = []
    for n, recipe in enumerate(sample_recipes(), start=1):
        created.append(await repo.create(recipe))
        print(f"[bold]Created Recipe {n}:[/bold]")
        print(str(recipe))

    await show_all(repo, "All Recipes:")

    first = await repo.get(created[0].id)
    print("[bold]Recipe by ID:[/bold]")
    print(str(first))

    first.favorite = False
    await repo.update(first)
    print("Updated Recipe")

    await repo.delete(created[2].id)
    print("Deleted Recipe 3")

    await show_all(repo, "All Recipes after deletion:")


async def main() -> None:
    async with db.connect(CONFIG) as repo:
        await demo(repo)


if __name__ == "__main__":
    logging.basicConfig(
        level=CONFIG.log_level,
        format="%(message)s",
        handlers=[RichHandler()],
    )
    asyncio.run(main())
