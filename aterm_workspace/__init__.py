"""
aterm-workspace - git working copy and parallel worktree backend
"""

from .__version__ import __version__
from .core import Workspace
from .config import Config, ConfigStore

__all__ = ["Workspace", "Config", "ConfigStore", "__version__"]
