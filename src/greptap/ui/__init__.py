"""Textual front end for greptap.

PUBLIC API:
  - GreptapApp: Consumer loop and renderer for one session
"""

from .app import GreptapApp

__all__ = ["GreptapApp"]
