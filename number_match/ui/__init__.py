"""User interface package for the number match game."""

from .main import (
    SOUND_ENV_VAR,
    NumberMatchApp,
    UIDirectories,
    main,
    resolve_directories,
    run,
)
from .toolkit import FontCache, NumberMatchUI

__all__ = [
    "SOUND_ENV_VAR",
    "UIDirectories",
    "NumberMatchApp",
    "NumberMatchUI",
    "FontCache",
    "main",
    "resolve_directories",
    "run",
]
