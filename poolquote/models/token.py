"""Token identity model."""

from pydantic import BaseModel, ConfigDict, Field


class TokenIdentity(BaseModel):
    """Identity of a coin type on the ledger.

    ``address`` is the fully-qualified Move type string
    (``<package>::<module>::<Identifier>``) and is the unique key: two
    identities are equal if and only if their addresses match.
    """

    symbol: str
    name: str
    decimals: int = Field(ge=0, le=255)
    address: str

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenIdentity):
            return NotImplemented
        return self.address == other.address

    def __hash__(self) -> int:
        return hash(self.address)
