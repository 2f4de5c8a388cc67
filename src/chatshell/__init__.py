"""
chatshell - interactive input front-end for a command-line chat REPL.
"""

__version__ = "0.1.0"
