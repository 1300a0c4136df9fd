from .auth import LoginSchema, RefreshTokenSchema, TokenPairSchema

__all__ = ["LoginSchema", "RefreshTokenSchema", "TokenPairSchema"]
