from .shade import ShadeOracle

__all__ = ["ShadeOracle"]
