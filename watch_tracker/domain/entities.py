from __future__ import annotations

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
WatchStatus = Literal["Available", "Sold"]


def new_id() -> str:
    return str(uuid4())


# --- Inventory ---

class WatchItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id)
    model: str
    purchase_price: float = Field(default=0, ge=0, alias="purchasePrice")
    parts_cost: float = Field(default=0, ge=0, alias="partsCost")
    posted_price: float | None = Field(default=None, alias="postedPrice")
    sold_price: float | None = Field(default=None, alias="soldPrice")
    status: WatchStatus = "Available"
    date_sold: str | None = Field(default=None, alias="dateSold")  # YYYY-MM-DD
    purchase_date: str | None = Field(default=None, alias="purchaseDate")
    notes: str | None = None

    @property
    def total_cost(self) -> float:
        return self.purchase_price + self.parts_cost

    @property
    def profit(self) -> float | None:
        if self.sold_price is None:
            return None
        return self.sold_price - self.total_cost

    @property
    def is_sold(self) -> bool:
        return self.status == "Sold"


# --- Wear Sessions ---

class WearLog(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id)
    watch_id: str = Field(alias="watchId")  # Non-owning; may dangle after delete
    start: str  # ISO-8601
    end: str | None = None  # None while the session is open

    @property
    def is_open(self) -> bool:
        return self.end is None
