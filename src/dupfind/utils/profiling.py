"""Profiling support for dupfind using cProfile.

When the DUPFIND_PROFILE environment variable is set to a directory path, each command-line run is profiled and the
statistics are saved to a per-session subdirectory of it.
"""
import cProfile
import functools
import itertools
import os
import time
from pathlib import Path
from typing import Callable, TypeVar, ParamSpec

P = ParamSpec('P')
T = TypeVar('T')

PROFILE_ENVIRONMENT_VARIABLE = 'DUPFIND_PROFILE'

_profile_counter = itertools.count()


def get_profile_dir() -> Path | None:
    """Get the profile directory for this session.

    Returns:
        {DUPFIND_PROFILE}/{timestamp_ms}_{pid} if DUPFIND_PROFILE is set, None otherwise
    """
    profile_path = os.environ.get(PROFILE_ENVIRONMENT_VARIABLE)
    if profile_path:
        return Path(profile_path) / f"{int(time.time() * 1000)}_{os.getpid()}"
    return None


def generate_profile_filename(prefix: str = "main") -> str:
    """Generate a profile filename unique within this process, like "main_54398_0.prof"."""
    return f"{prefix}_{os.getpid()}_{next(_profile_counter)}.prof"


def profile_main(func: Callable[P, T]) -> Callable[P, T]:
    """Decorator for command-line entry points; profiles the call when DUPFIND_PROFILE is set."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        profile_dir = get_profile_dir()

        if profile_dir is None:
            return func(*args, **kwargs)

        profile_dir.mkdir(parents=True, exist_ok=True)
        profile_file = profile_dir / generate_profile_filename()

        profiler = cProfile.Profile()
        try:
            profiler.enable()
            return func(*args, **kwargs)
        finally:
            profiler.disable()
            profiler.dump_stats(str(profile_file))

    return wrapper
