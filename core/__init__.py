"""Core module - settings and observability shared by every layer.

Remote access lives in /connectors/, tool definitions in /tools/ and
pure report shaping in /reporting/.
"""

__version__ = "1.0.0"
