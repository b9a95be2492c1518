"""Access token handling."""

from printpress.infrastructure.auth.tokens import create_access_token, decode_access_token

__all__ = ["create_access_token", "decode_access_token"]
