"""
Unlock component - Progressive unlock controller.
"""

from ._impl import (
    UnlockController,
    active_segments,
    build_timer_gradient,
    read_embedding,
)
from .component import (
    bind_controller,
    run,
    run_read_embedding,
    run_timer_indicator,
)
from .models import (
    DEFAULT_CONFIG,
    ClientUnlockState,
    Cooldown,
    Done,
    EmbeddingOutput,
    ErrorReason,
    Failed,
    Idle,
    Loading,
    LockedContentFetchError,
    Phase,
    ReadEmbeddingInput,
    Ready,
    TimerIndicatorInput,
    TimerIndicatorOutput,
    UnlockConfig,
    UnlockMessages,
    UnlockState,
)
from .ports import LockedContentFetcherPort, PaywallViewPort, TimerHandle, TimerPort

__all__ = [
    # Entry points
    "bind_controller",
    "run",
    "run_read_embedding",
    "run_timer_indicator",
    # Controller
    "UnlockController",
    "active_segments",
    "build_timer_gradient",
    "read_embedding",
    # States
    "ClientUnlockState",
    "Cooldown",
    "Done",
    "ErrorReason",
    "Failed",
    "Idle",
    "Loading",
    "Phase",
    "Ready",
    "UnlockState",
    # Input models
    "ReadEmbeddingInput",
    "TimerIndicatorInput",
    # Output models
    "EmbeddingOutput",
    "TimerIndicatorOutput",
    # Configuration
    "DEFAULT_CONFIG",
    "UnlockConfig",
    "UnlockMessages",
    # Errors
    "LockedContentFetchError",
    # Ports
    "LockedContentFetcherPort",
    "PaywallViewPort",
    "TimerHandle",
    "TimerPort",
]
