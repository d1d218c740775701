"""
Page context collaborators: view detection and identity resolution.
"""
from src.context.identity import IdentityResolver, normalize_username
from src.context.view import ViewContext, build_with_replies_url, parse_pathname

__all__ = [
    "IdentityResolver",
    "ViewContext",
    "build_with_replies_url",
    "normalize_username",
    "parse_pathname",
]
