"""Frame descriptions consumed by render drivers."""

from .frame import FILLER, Frame, FrameRow, StyledRun, build_frame

__all__ = ["FILLER", "Frame", "FrameRow", "StyledRun", "build_frame"]
