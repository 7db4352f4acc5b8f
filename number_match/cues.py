"""Identifiers for the sounds the game asks to be played."""

from typing import Union

SUCCESS_CUE = "success"
FAILURE_CUE = "failure"

# A number cue is the number itself; feedback cues are the strings above.
Cue = Union[int, str]
