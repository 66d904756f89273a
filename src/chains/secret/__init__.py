from .client import SecretClient

__all__ = ["SecretClient"]
