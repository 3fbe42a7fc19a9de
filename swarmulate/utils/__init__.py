# -*- coding: utf-8 -*-
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import colorlog

from . import benchmark_functions

if TYPE_CHECKING:
    from ..solver import ProgressReport

__all__ = [
    "benchmark_functions",
    "log_progress",
    "set_logger_config",
]

log = logging.getLogger("swarmulate.progress")


def log_progress(report: "ProgressReport") -> None:
    """
    Default progress collaborator of the solver: write the progress report to the log.

    Parameters
    ----------
    report : ProgressReport
        The progress report of the current step.
    """
    percent = 100 * report.step // report.steps if report.steps > 0 else 100
    log.info(
        f"{percent:3d}% | step {report.step}/{report.steps} | w={report.inertia:.2f} | best={report.best_fitness:.5e}"
    )


def set_logger_config(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_to_stdout: bool = True,
    colors: bool = True,
) -> None:
    """
    Set up the logger. Should only need to be done once.

    Parameters
    ----------
    level : int
        The default level for logging. Default is ``logging.INFO``.
    log_file : str | Path, optional
        The file to save the log to.
    log_to_stdout : bool
        A flag indicating if the log should be printed on stdout. Default is True.
    colors : bool
        A flag for using colored logs. Default is True.
    """
    # Get base logger for Swarmulate.
    base_logger = logging.getLogger()
    base_logger.handlers.clear()
    simple_formatter = logging.Formatter("[%(asctime)s][%(name)s][%(levelname)s] - %(message)s")
    if colors:
        formatter = colorlog.ColoredFormatter(
            fmt="[%(cyan)s%(asctime)s%(reset)s][%(blue)s%(name)s%(reset)s]"
            "[%(log_color)s%(levelname)s%(reset)s] - %(message)s",
            datefmt=None,
            reset=True,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
            secondary_log_colors={},
        )
        std_handler = logging.StreamHandler(stream=sys.stdout)
        std_handler.setFormatter(formatter)
    else:
        std_handler = logging.StreamHandler(stream=sys.stdout)
        std_handler.setFormatter(simple_formatter)

    if log_to_stdout:
        base_logger.addHandler(std_handler)
    if log_file is not None:
        log_file = Path(log_file)
        log_dir = log_file.parents[0]
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(filename=log_file)
        file_handler.setFormatter(simple_formatter)
        base_logger.addHandler(file_handler)
    base_logger.setLevel(level)
