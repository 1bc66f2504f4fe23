"""
Console — single-line prompts, user messages and logger setup.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime


def setup_logger(log_dir: str = ".flagshell/logs",
                 verbose: bool = False) -> logging.Logger:
    """Creates a file logger. All verbose output goes here.

    Calling it again replaces the handlers installed by the previous call.
    """
    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"flagshell_{timestamp}.log")

    logger = logging.getLogger("flagshell")
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        if getattr(handler, "_flagshell_owned", False):
            logger.removeHandler(handler)
            handler.close()

    # File handler captures everything
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
    ))
    fh._flagshell_owned = True
    logger.addHandler(fh)

    if verbose:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.INFO)
        sh.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        sh._flagshell_owned = True
        logger.addHandler(sh)

    return logger


def is_yes(answer: str) -> bool:
    """Interpret a ``[y]/n`` answer.  Blank input means yes."""
    return answer == "" or answer.lower() == "y"


class Console:
    """Terminal console used by the edit workflow.

    Subclasses override :meth:`read_line` and :meth:`write` to script the
    interaction (tests) or route it elsewhere.
    """

    def read_line(self, prompt: str = "") -> str:
        return input(prompt)

    def write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def println(self, text: str = "") -> None:
        self.write(text + "\n")

    def warn(self, text: str) -> None:
        self.println(f"Warning: {text}")

    def error(self, text: str) -> None:
        self.println(f"Error: {text}")

    def ask_yes_no(self, question: str) -> bool:
        return is_yes(self.read_line(f"{question} [y]/n "))

    def print_json(self, data) -> None:
        self.println(json.dumps(data, indent=2))
