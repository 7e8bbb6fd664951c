"""LogProgressAdapter — reports job transitions via logging."""

import logging
from typing import Optional

from ports.progress import ProgressPort

logger = logging.getLogger(__name__)


class LogProgressAdapter(ProgressPort):
    def report(
        self,
        job_id: str,
        stage: str,
        elapsed_ms: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        msg = f"[{job_id}] {stage}"
        if elapsed_ms is not None and elapsed_ms >= 0:
            msg += f" after {elapsed_ms} ms"
        if detail:
            msg += f": {detail}"
        if stage == "failed":
            logger.warning(msg)
        else:
            logger.info(msg)
