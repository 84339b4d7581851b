# grepjump Package
"""
Backend-agnostic front end for line-oriented search tools.

Pieces:
  - Registry: named backend configurations and their priority order
  - Selection: first enabled backend whose executable is on PATH
  - Process: asynchronous search subprocess streaming PATH:LINE:CONTENT lines
  - Jump: open the selected match, wrapped in pre/post hooks
"""

__version__ = "0.1.0-dev"
