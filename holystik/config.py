"""
HolyStik Settings
=================
Validated settings for the file runner and the REPL.
"""
from pydantic import BaseModel, Field

from .rasterizer import DEFAULT_HEIGHT, DEFAULT_WIDTH


class CanvasSettings(BaseModel):
    """Size of the character grid shapes are rendered onto."""
    width: int = Field(DEFAULT_WIDTH, gt=0, le=1000)
    height: int = Field(DEFAULT_HEIGHT, gt=0, le=1000)


class RunSettings(BaseModel):
    """Options for running a script file."""
    canvas: CanvasSettings = Field(default_factory=CanvasSettings)
    echo_source: bool = True
