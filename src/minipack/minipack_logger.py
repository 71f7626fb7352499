"""
Multi-level logger used to report vendoring progress.
"""

import inspect
import logging
from datetime import datetime

from pydantic import BaseModel

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class LogLine(BaseModel):
    """
    Represents a line in the minipack log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class MinipackLogger:
    """
    Logger class. Every event (info, success, warning, error) is routed through log().
    """

    def __init__(self, name: str = "minipack") -> None:
        self.logger = logging.getLogger(name)
        if self.logger.level == logging.NOTSET:
            self.logger.setLevel(logging.INFO)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the message at the given level, tagged with the caller's location
        """

        debug_message = debug_message.replace("\n", " ")

        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)

        caller_file = calframe[1][1].split("/")[-1]
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        debug_log_line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            caller_file=caller_file,
            caller_name=caller_name,
            caller_line=caller_line,
            message=debug_message,
        )

        self.logger.log(level=level, msg=debug_log_line.model_dump_json())
