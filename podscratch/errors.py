"""Exceptions raised while assembling and running scripts.

Assembly errors are raised to the caller building a script or a pod and stop
the offending call. Execution errors are raised from inside ``Script.tick()``
and halt only the script that raised them.
"""

from typing import Optional


class PodError(Exception):
    """Base class for every error raised by podscratch."""

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class ConfigError(PodError):
    """Invalid environment or pod options."""


# ============================================================================
# Assembly-time errors
# ============================================================================

class AssemblyError(PodError):
    """A script, resource or pod could not be put together."""


class UnknownBlockKindError(AssemblyError):
    pass


class IncompatibleBlockError(AssemblyError):
    pass


class DuplicateResourceError(AssemblyError):
    pass


class UnknownResourceTypeError(AssemblyError):
    pass


class UnknownResourceError(AssemblyError):
    pass


class UnknownPodError(AssemblyError):
    pass


class ProjectError(AssemblyError):
    """A project file is missing, unreadable or malformed."""


# ============================================================================
# Lookup errors (raised while assembling or while ticking)
# ============================================================================

class UnknownVariableError(PodError):
    pass


class UnknownAssetError(PodError):
    """A costume, backdrop or sound name that was never loaded."""


# ============================================================================
# Execution errors
# ============================================================================

class ExecutionError(PodError):
    """Base class for errors raised while a script is running.

    ``block_index`` is the position in the script's block sequence where the
    problem was found, when known.
    """

    def __init__(self, message: str, detail: str = "", block_index: Optional[int] = None):
        super().__init__(message, detail)
        self.block_index = block_index


class ScriptStructureError(ExecutionError):
    """A malformed script was detected while it was running."""


class BlockArgumentError(ExecutionError):
    """A block received an argument value it cannot work with."""


class BlockExecutionError(ExecutionError):
    """A block's behaviour failed with an unexpected exception."""
