"""Algorithm trace generation and playback package."""

from .api import (  # noqa: F401
    describe_problem,
    dump_trace,
    generate_trace,
    list_problems,
)
from .playback import PlaybackEngine  # noqa: F401
from .registry import REGISTRY  # noqa: F401
from .session import VisualizerSession  # noqa: F401
from .trace_controller import check_compatibility, compute_trace  # noqa: F401
