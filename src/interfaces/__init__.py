"""Protocol interfaces for the Shade price client."""
from .chain import ContractQueryClient
from .price_oracle import PriceOracle

__all__ = ["ContractQueryClient", "PriceOracle"]
