from typing import Any, Iterable


class Ingredient:
    def __init__(self, *, qty: float, unit: str = "", name: str) -> None:
        self.qty = qty
        self.unit = unit
        self.name = name

    def __repr__(self) -> str:
        return f"<Ingredient(qty={self.qty}, unit={self.unit}, name={self.name})>"

    def __str__(self) -> str:
        return f"Qty: {self.qty:f} {self.unit}, Name: {self.name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.qty, self.unit, self.name) == (other.qty, other.unit, other.name)

    def to_dict(self) -> dict[str, Any]:
        return {"qty": self.qty, "unit": self.unit, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ingredient":
        qty = data["qty"]
        if isinstance(qty, bool) or not isinstance(qty, (int, float)):
            raise TypeError(f"qty must be a number, got {qty!r}")
        return cls(
            qty=float(qty),
            unit=_as_str(data["unit"], "unit"),
            name=_as_str(data["name"], "name"),
        )


class Step:
    def __init__(self, *, order: int, description: str = "") -> None:
        self.order = order
        self.description = description

    def __repr__(self) -> str:
        return f"<Step(order={self.order})>"

    def __str__(self) -> str:
        return f"Order: {self.order}, Description: {self.description}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Step):
            return NotImplemented
        return (self.order, self.description) == (other.order, other.description)

    def to_dict(self) -> dict[str, Any]:
        return {"order": self.order, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Step":
        order = data["order"]
        # bool is an int subclass; 1.5, nan and inf are not orders.
        if isinstance(order, bool) or not isinstance(order, (int, float)):
            raise TypeError(f"order must be an integer, got {order!r}")
        if isinstance(order, float) and not order.is_integer():
            raise ValueError(f"order must be an integer, got {order!r}")
        return cls(
            order=int(order),
            description=_as_str(data["description"], "description"),
        )


class Recipe:
    """The aggregate root. Ingredients and directions only live inside it."""

    def __init__(
        self,
        *,
        id: str = "",
        name: str,
        description: str = "",
        favorite: bool = False,
        ingredients: Iterable[Ingredient] = (),
        directions: Iterable[Step] = (),
    ) -> None:
        self.id = id
        self.name = name
        self.description = description
        self.favorite = favorite
        self.ingredients = list(ingredients)
        self.directions = list(directions)

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name={self.name})>"

    def __str__(self) -> str:
        ingredients = "".join(f"  - {i}\n" for i in self.ingredients)
        directions = "".join(f"  - {d}\n" for d in self.directions)
        return (
            f"Recipe ID: {self.id}\n"
            f"Name: {self.name}\n"
            f"Description: {self.description}\n"
            f"Favorite: {str(self.favorite).lower()}\n"
            f"Ingredients:\n{ingredients}"
            f"Directions:\n{directions}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.favorite == other.favorite
            and self.ingredients == other.ingredients
            and self.directions == other.directions
        )

    def to_dict(self) -> dict[str, Any]:
        """External shape of the recipe, `id` left out until storage assigns one."""
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        data.update(
            {
                "name": self.name,
                "description": self.description,
                "favorite": self.favorite,
                "ingredients": [i.to_dict() for i in self.ingredients],
                "directions": [d.to_dict() for d in self.directions],
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        favorite = data["favorite"]
        if not isinstance(favorite, bool):
            raise TypeError(f"favorite must be a boolean, got {favorite!r}")
        return cls(
            id=_as_str(data.get("id", ""), "id"),
            name=_as_str(data["name"], "name"),
            description=_as_str(data["description"], "description"),
            favorite=favorite,
            ingredients=[Ingredient.from_dict(i) for i in _as_list(data["ingredients"])],
            directions=[Step.from_dict(d) for d in _as_list(data["directions"])],
        )


def _as_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {value!r}")
    return value


def _as_list(value: Any) -> list[dict[str, Any]]:
    # Drivers hand back null for arrays that were never populated.
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {value!r}")
    return value  # pyright: ignore[reportUnknownVariableType]
