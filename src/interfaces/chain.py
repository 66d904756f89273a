"""Chain client protocol — contract query abstraction."""
from typing import Any, Protocol


class ContractQueryClient(Protocol):
    """Abstract interface for read-only smart-contract queries."""

    async def contract_query(
        self, contract_address: str, code_hash: str, query: dict[str, Any]
    ) -> dict[str, Any]: ...
