"""replan Python package.

Public API:
  - import from `replan.api` (preferred) or `import replan` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
