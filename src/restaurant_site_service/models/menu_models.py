"""Menu catalog models.

These models represent menu categories and menu items, the inputs used to
create and update them, and their DynamoDB item representation.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)

PRICE_QUANTUM = Decimal("0.01")

# Fields an update may explicitly set to null
NULLABLE_ITEM_FIELDS = {"image_url", "dietary_info"}

_http_url_adapter = TypeAdapter(HttpUrl)


def quantize_price(value: Decimal) -> Decimal:
    """Round a price to two decimal places."""
    return Decimal(str(value)).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def round_price_input(value: Any) -> Any:
    """Round raw price input to cents ahead of the positivity check.

    A price such as 0.004 becomes 0.00 here and is then rejected as not
    positive. Input that is not a number is passed through untouched so the
    Decimal validation reports it.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        return value
    try:
        return quantize_price(value)
    except InvalidOperation:
        return value


def check_image_url(value: str | None) -> str | None:
    """Require an http(s) URL but keep the caller's exact string."""
    if value is not None:
        try:
            _http_url_adapter.validate_python(value)
        except ValidationError as e:
            raise ValueError("image_url must be an http or https URL") from e
    return value


def split_dietary_info(dietary_info: str | None) -> list[str]:
    """Split a comma-joined dietary tag string into trimmed tags."""
    if not dietary_info:
        return []
    return [tag.strip() for tag in dietary_info.split(",") if tag.strip()]


class MenuCategory(BaseModel):
    """Menu category model.

    Stored in DynamoDB with id as partition key.
    """

    id: int = Field(..., description="Unique identifier for the category")
    name: str = Field(..., description="Category name", min_length=1)
    description: str | None = Field(None, description="Category description")
    display_order: int = Field(default=0, description="Display rank of the category", ge=0)
    is_active: bool = Field(default=True, description="Whether the category is shown")
    created_at: datetime = Field(..., description="Creation timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "display_order": self.display_order,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
        }

        if self.description is not None:
            item["description"] = self.description

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuCategory":
        """Create MenuCategory from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuCategory: Parsed model instance
        """
        return cls(
            id=int(item["id"]),
            name=item["name"],
            description=item.get("description"),
            display_order=int(item.get("display_order", 0)),
            is_active=bool(item.get("is_active", True)),
            created_at=datetime.fromisoformat(item["created_at"]),
        )


class MenuCategoryCreate(BaseModel):
    """Input for creating a menu category."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    display_order: int = Field(..., ge=0)


class MenuItem(BaseModel):
    """Menu item model.

    Stored in DynamoDB with id as partition key and a category_id index.
    """

    id: int = Field(..., description="Unique identifier for the menu item")
    category_id: int = Field(..., description="Category this item belongs to")
    name: str = Field(..., description="Item name")
    description: str = Field(..., description="Item description")
    ingredients: str = Field(..., description="Ingredients list")
    preparation_info: str = Field(..., description="How the dish is prepared")
    price: Decimal = Field(..., description="Item price", gt=0)
    image_url: str | None = Field(None, description="URL to item image")
    is_chefs_special: bool = Field(default=False, description="Featured by the chef")
    is_available: bool = Field(default=True, description="Whether item is currently available")
    dietary_info: str | None = Field(None, description="Comma-joined dietary tags")
    display_order: int = Field(default=0, description="Display rank within the category", ge=0)
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Any:
        """Keep prices at two decimal places."""
        return round_price_input(v)

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> float:
        """Expose prices as JSON numbers."""
        return float(price)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dietary_tags(self) -> list[str]:
        """Dietary tags parsed from dietary_info."""
        return split_dietary_info(self.dietary_info)

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "category_id": self.category_id,
            "name": self.name,
            "description": self.description,
            "ingredients": self.ingredients,
            "preparation_info": self.preparation_info,
            "price": self.price,
            "is_chefs_special": self.is_chefs_special,
            "is_available": self.is_available,
            "display_order": self.display_order,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

        if self.image_url is not None:
            item["image_url"] = self.image_url

        if self.dietary_info is not None:
            item["dietary_info"] = self.dietary_info

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(
            id=int(item["id"]),
            category_id=int(item["category_id"]),
            name=item["name"],
            description=item["description"],
            ingredients=item["ingredients"],
            preparation_info=item["preparation_info"],
            price=Decimal(str(item["price"])),
            image_url=item.get("image_url"),
            is_chefs_special=bool(item.get("is_chefs_special", False)),
            is_available=bool(item.get("is_available", True)),
            dietary_info=item.get("dietary_info"),
            display_order=int(item.get("display_order", 0)),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )


class MenuItemCreate(BaseModel):
    """Input for creating a menu item."""

    category_id: int
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    ingredients: str = Field(..., min_length=1)
    preparation_info: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0)
    image_url: str | None = None
    is_chefs_special: bool = False
    dietary_info: str | None = None
    display_order: int = Field(..., ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Any:
        """Round to cents before the positivity check."""
        return round_price_input(v)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Accept only http(s) URLs, stored as sent."""
        return check_image_url(v)


class MenuItemUpdate(BaseModel):
    """Sparse input for updating a menu item.

    Only fields explicitly present in the request replace stored values, so
    ``image_url=None`` clears the image while an omitted ``image_url`` keeps it.
    """

    category_id: int | None = None
    name: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    ingredients: str | None = Field(None, min_length=1)
    preparation_info: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, gt=0)
    image_url: str | None = None
    is_chefs_special: bool | None = None
    is_available: bool | None = None
    dietary_info: str | None = None
    display_order: int | None = Field(None, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Any:
        """Round to cents before the positivity check."""
        return round_price_input(v)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Accept only http(s) URLs, stored as sent."""
        return check_image_url(v)

    @model_validator(mode="after")
    def validate_required_fields_not_cleared(self) -> "MenuItemUpdate":
        """Reject explicit nulls for fields a menu item always carries."""
        for field_name in self.model_fields_set - NULLABLE_ITEM_FIELDS:
            if getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were supplied.

        Returns:
            dict: Field name to new value for every supplied field
        """
        return self.model_dump(exclude_unset=True)
