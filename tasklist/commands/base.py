"""
Base class for tasklist subcommands.

Each command runs through the same lifecycle: init() prepares resources,
run() returns an exit code, cleanup() always runs afterwards.
"""
import argparse
import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class Command(ABC):
    """
    Base class for all commands.

    Subclasses declare their arguments in add_arguments() and do their work
    in run(). Used as a context manager, init() and cleanup() bracket run().
    """

    def __init__(self, args: Optional[argparse.Namespace] = None):
        self.args = args
        self._initialized = False
        self._cleaned_up = False

    @classmethod
    def get_name(cls) -> str:
        """Command name used on the command line ("ServerCommand" -> "server")."""
        return cls.__name__.replace("Command", "").lower()

    @classmethod
    def get_description(cls) -> str:
        return cls.__doc__ or f"{cls.__name__} command"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments to the parser."""
        pass

    def init(self) -> None:
        if self._initialized:
            return
        self._initialized = True
        logger.debug(f"Initialized {self.__class__.__name__}")

    @abstractmethod
    def run(self) -> int:
        """
        Execute the command.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        pass

    def cleanup(self) -> None:
        if self._cleaned_up:
            return
        self._cleaned_up = True
        logger.debug(f"Cleaned up {self.__class__.__name__}")

    def __enter__(self):
        self.init()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
        return False

