"""Pool snapshot model.

A snapshot is built fresh on every resolution call and never mutated.
Serialized field names match the camelCase names the UI consumes.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from poolquote.models.token import TokenIdentity
from poolquote.models.types import BPS_DENOMINATOR, UINT64_MAX, ObjectId, UnsignedAmount


class PoolSnapshot(BaseModel):
    """Normalized state of one two-asset pool at resolution time.

    ``type_x``/``type_y`` always hold the raw on-chain type strings, even
    when ``token_x``/``token_y`` could not be resolved (``None``).
    """

    id: ObjectId = Field(description="Ledger object id of the pool.")
    token_x: TokenIdentity | None = Field(default=None, alias="tokenX")
    token_y: TokenIdentity | None = Field(default=None, alias="tokenY")
    type_x: str = Field(alias="typeX")
    type_y: str = Field(alias="typeY")
    reserve_x: UnsignedAmount = Field(default="0", alias="reserveX")
    reserve_y: UnsignedAmount = Field(default="0", alias="reserveY")
    lp_supply: UnsignedAmount = Field(default="0", alias="lpSupply")
    fee_bps: int = Field(default=0, ge=0, le=65_535, alias="feeBasisPoints")
    is_active: bool = Field(default=True, alias="isActive")
    created_at: int = Field(default=0, ge=0, le=UINT64_MAX, alias="createdAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def reserve_x_int(self) -> int:
        """Reserve of X as integer for calculations."""
        return int(self.reserve_x)

    @property
    def reserve_y_int(self) -> int:
        """Reserve of Y as integer for calculations."""
        return int(self.reserve_y)

    @property
    def fee_rate(self) -> Decimal:
        """Swap fee as a fraction (30 bps -> 0.003)."""
        return Decimal(self.fee_bps) / BPS_DENOMINATOR

    def has_token(self, address: str) -> bool:
        """Return True if either side of the pool is the given coin type."""
        return address in (self.type_x, self.type_y)

    def has_pair(self, address_a: str, address_b: str) -> bool:
        """Return True if the pool trades exactly this pair (either order)."""
        return address_a != address_b and self.has_token(address_a) and self.has_token(address_b)

    def get_reserves(self, token_in: str, token_out: str) -> tuple[int, int] | None:
        """Get reserves ordered as (reserve_in, reserve_out).

        Sides are assigned by comparing coin type addresses.

        Returns:
            Tuple of reserves, or None if the pair does not match this pool
        """
        if token_in == self.type_x and token_out == self.type_y:
            return self.reserve_x_int, self.reserve_y_int
        if token_in == self.type_y and token_out == self.type_x:
            return self.reserve_y_int, self.reserve_x_int
        return None
