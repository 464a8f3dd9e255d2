from __future__ import annotations

import logging
from typing import final, override

from switch_library_indexer.domain.protocols.progress_protocol import ProgressProtocol


@final
class LoggingProgress(ProgressProtocol):
    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @override
    def update(self, current: int, total: int, message: str) -> None:
        if current < 0 or total < 0:
            self._logger.debug("%s", message)
            return
        self._logger.debug("[%d/%d] %s", current, total, message)
