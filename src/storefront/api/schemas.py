"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the Protean commands they
are translated into.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class LineItemSchema(BaseModel):
    product_id: str
    color: str | None = None
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)


class PlaceOrderRequest(BaseModel):
    products: list[LineItemSchema] = Field(min_length=1)
    address_id: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "products": [
                        {"product_id": "prod-001", "color": "Red", "quantity": 2, "price": 49.99},
                    ],
                    "address_id": "addr-001",
                }
            ]
        }
    }


class ReasonRequest(BaseModel):
    reason: str | None = None


class UpdateStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    color: str | None = None
    quantity: int = Field(ge=1, default=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class MessageResponse(BaseModel):
    message: str


class ItemIdResponse(BaseModel):
    item_id: str


class CountResponse(BaseModel):
    count: int
