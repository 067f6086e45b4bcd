"""Batch scoring exceptions."""

from typing import Optional
from .base import QuoteRankError

class ProcessingError(QuoteRankError):
    """Base class for batch scoring errors."""

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        request_id: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if stage:
            self.add_context('processing_stage', stage)
        if request_id:
            self.add_context('request_id', request_id)


class BatchProcessingError(ProcessingError):
    """Raised when a batch run cannot produce any result."""

    def __init__(
        self,
        message: str,
        *,
        total_requests: Optional[int] = None,
        failed_count: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, stage="batch_processing", **kwargs)
        if total_requests is not None:
            self.add_context('total_requests', total_requests)
        if failed_count is not None:
            self.add_context('failed_requests', failed_count)

        self.add_suggestion("Check the request files with --dry-run")

    def _get_default_error_code(self) -> str:
        return "BATCH_PROCESSING_FAILED"
