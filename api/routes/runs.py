"""
Archive run trigger endpoint
"""

from typing import Optional
from fastapi import APIRouter, Depends, Request
from archiver.runner import ArchiveRunner
from api.dependencies import get_runner
from schemas.api import RunRequest, RunResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Runs"])


@router.post("/runs", response_model=RunResponse)
async def trigger_run(
    request: Request,
    body: Optional[RunRequest] = None,
    runner: ArchiveRunner = Depends(get_runner)
):
    """
    Run every archive set in a configuration file and return the summary.

    Per-set failures are reported in the summary (and by alert), never as
    an HTTP error: a completed run always answers 200.
    """
    config_path = body.config_path if body else None
    logger.info(f"Archive run requested (config: {config_path or 'default'})")
    result = await runner.run(config_path)

    return RunResponse(
        request_id=getattr(request.state, "request_id", None),
        **result
    )
