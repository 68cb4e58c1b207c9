import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger("snaptranslate")

MAX_LOGS = 200


@dataclass
class StatusStore:
    last_error: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    def log(self, msg: str):
        logger.info(msg)
        self._append(msg)

    def error(self, code: str, msg: str):
        self.last_error = code
        logger.warning(msg)
        self._append(msg)

    def clear_error(self):
        self.last_error = None

    def _append(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > MAX_LOGS:
            self.logs = self.logs[-MAX_LOGS:]
