import os
import sys
from typing import Optional


class CustomException(Exception):
    """Base error for the package; remembers where the active exception was raised, if any."""

    def __init__(self, error_message: object, error_details: Optional[BaseException] = None):
        self.message = str(error_message)
        exc = error_details if error_details is not None else sys.exc_info()[1]
        tb = exc.__traceback__ if exc is not None else None
        # Walk to the innermost frame: that is where the original error happened
        while tb is not None and tb.tb_next is not None:
            tb = tb.tb_next
        self.file_name: Optional[str] = os.path.basename(tb.tb_frame.f_code.co_filename) if tb else None
        self.lineno: Optional[int] = tb.tb_lineno if tb else None
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.file_name is None:
            return self.message
        return f"{self.message} [{self.file_name}:{self.lineno}]"
