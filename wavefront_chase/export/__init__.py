"""I/O package for the wavefront chase."""

from .trace_log import TraceWriter
from .renderer import TerminalRenderer
from .reporter import Reporter
from .visualizer import Visualizer

__all__ = ['TraceWriter', 'TerminalRenderer', 'Reporter', 'Visualizer']
