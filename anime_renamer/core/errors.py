"""Exception types raised by the renamer."""


class RenamerError(Exception):
    """Base class for renamer failures."""


class ValidationError(RenamerError):
    """Invocation input is missing or malformed."""


class ScriptError(RenamerError):
    """The user script failed to compile, raised, or returned nil, message."""


class ResolutionError(RenamerError):
    """A script output could not be turned into a destination or subfolder."""
