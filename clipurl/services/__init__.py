"""Application services"""

from .poll_loop import PollLoop, LoopState

__all__ = ['PollLoop', 'LoopState']
