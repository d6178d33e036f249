"""Core functionality for anime-renamer."""

from .cache import Decision, ResultCache
from .errors import RenamerError, ValidationError, ScriptError, ResolutionError
from .http_client import http_get, err_payload
from .normalizers import norm_invocation
from .renamer import (
    LuaRenamer, RenamerContext, ScriptLogger, get_context, compute_filename, compute_destination,
)
from .shoko import ShokoClient

__all__ = [
    "Decision", "ResultCache",
    "RenamerError", "ValidationError", "ScriptError", "ResolutionError",
    "http_get", "err_payload", "norm_invocation",
    "LuaRenamer", "RenamerContext", "ScriptLogger", "get_context",
    "compute_filename", "compute_destination", "ShokoClient",
]
