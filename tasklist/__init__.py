"""
tasklist - minimal task management service and client.
"""
__version__ = "0.1.0"
