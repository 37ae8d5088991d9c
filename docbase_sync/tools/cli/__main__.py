"""
Entry point of `docbase-sync` CLI when run as a module.
"""

from .main import run

run()
