"""Domain models for generation session states."""

from dataclasses import dataclass
from typing import ClassVar

from progen_studio.domain.errors import GenerationError
from progen_studio.domain.generation import GenerationRequest, GenerationResult


@dataclass(frozen=True)
class Idle:
    """Nothing composed yet."""

    status: ClassVar[str] = "IDLE"


@dataclass(frozen=True)
class Composing:
    """The user is editing text or preset selection."""

    status: ClassVar[str] = "COMPOSING"


@dataclass(frozen=True)
class Generating:
    """A generation call is in flight."""

    request: GenerationRequest
    status: ClassVar[str] = "GENERATING"


@dataclass(frozen=True)
class Succeeded:
    """The last attempt produced an image."""

    result: GenerationResult
    status: ClassVar[str] = "SUCCEEDED"


@dataclass(frozen=True)
class Failed:
    """The last attempt failed."""

    error: GenerationError
    status: ClassVar[str] = "FAILED"


SessionState = Idle | Composing | Generating | Succeeded | Failed
