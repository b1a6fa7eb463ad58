"""Quote models derived from pool snapshots.

Quotes are stateless and recomputed per request.
"""

from pydantic import BaseModel, ConfigDict, Field

from poolquote.models.token import TokenIdentity


class SwapQuote(BaseModel):
    """Result of quoting an exact-input swap against one pool."""

    input_token: TokenIdentity = Field(alias="inputToken")
    output_token: TokenIdentity = Field(alias="outputToken")
    input_amount: str = Field(alias="inputAmount")
    output_amount: str = Field(alias="outputAmount")
    price_impact_percent: float = Field(ge=0, alias="priceImpactPercent")
    fee_amount: str = Field(alias="feeAmount")
    route: list[str]

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class RateQuote(BaseModel):
    """Spot exchange rate: 1 unit of A equals ``rate`` units of B."""

    rate: float
    formatted: str

    model_config = ConfigDict(frozen=True)
