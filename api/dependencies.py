"""
FastAPI dependencies
"""

from archiver.runner import ArchiveRunner


def get_runner() -> ArchiveRunner:
    """A fresh runner per request; runs never share adapter state"""
    return ArchiveRunner()
