"""
Subcommands of the tasklist entry point.
"""
