import os
import time
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

import psutil
from tqdm import tqdm

from quoterank.config.resolvers import result_path_for
from quoterank.config.settings import OutputFormat, Settings
from quoterank.domain.exceptions import (
    BatchProcessingError,
    ConfigurationError,
    FileValidationError,
    ProcessingError,
    ValidationError,
)
from quoterank.domain.models import ScoringRequest
from quoterank.processing import InputValidator
from quoterank.results import assemblers
from quoterank.scoring import ScoringEngine, RankedResult
from quoterank.utils.timing import section_timer, timeit

logger = logging.getLogger(__name__)
summary_logger = logging.getLogger("quoterank.summary")


@dataclass
class RequestOutcome:
    """What happened to one request file."""
    source: str
    output_path: Optional[str] = None
    winner: Optional[str] = None
    n_quotes: int = 0
    error: Optional[Dict[str, Any]] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class PipelineResult:
    """Batch scoring result."""
    n_inputs: int
    outcomes: List[RequestOutcome] = field(default_factory=list)
    processing_time: float = 0.0
    rss_mb: float = 0.0

    @property
    def n_scored(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def n_failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def output_paths(self) -> List[str]:
        return [o.output_path for o in self.outcomes if o.output_path]


class ScoringPipeline:
    """
    Score a batch of request files and write one result file per request.

    A request that fails validation is recorded and skipped; the rest of the
    batch continues. Anything else aborts the run as a ``ProcessingError``.
    """

    def __init__(self, settings: Settings, engine: Optional[ScoringEngine] = None):
        self.settings = settings
        self.engine = engine or ScoringEngine()
        self.process = psutil.Process(os.getpid())
        self.base_config = settings.scoring.to_scoring_config()
        self._claimed: Set[Path] = set()
        self._validate_config()

    def _validate_config(self) -> None:
        if not self.settings.output.output_dir:
            raise ConfigurationError(
                "An output directory is required",
                config_field="output.output_dir"
            ).add_suggestion("Provide --output DIR")

    @timeit(logger, "score_request")
    def score_request(self, request: ScoringRequest) -> RankedResult:
        """Score one parsed request, its own ``config`` layered over the run's settings."""
        config = InputValidator.parse_config(request.config_overrides, base=self.base_config)
        return self.engine.score(request.rfq, request.quotes, request.vendor_histories, config)

    def output_path_for(self, source: str) -> Path:
        out = self.settings.output
        extension = "csv" if out.format is OutputFormat.CSV else "json"
        return result_path_for(source, out.output_dir, extension, input_root=self.settings.input_directory)

    def write_result(self, request: ScoringRequest, result: RankedResult, source: str) -> Path:
        out = self.settings.output
        path = self.output_path_for(source)
        if out.format is OutputFormat.CSV:
            return assemblers.write_csv(assemblers.export_rows(result, rfq_id=request.request_id), path)

        payload = assemblers.ranked_result_to_dict(result, include_raw=out.include_raw)
        payload["rfq"] = request.request_id
        return assemblers.write_json(payload, path, indent=out.indent)

    def _process_one(self, source: str) -> RequestOutcome:
        try:
            target = self.output_path_for(source)
            if target in self._claimed:
                raise FileValidationError(
                    f"Result file {target} was already written by another request in this run",
                    file_path=source,
                    validation_type="output_collision",
                ).add_suggestion("Rename one of the request files")
            request = InputValidator.load_request_file(source)
            result = self.score_request(request)
        except ValidationError as e:
            e.add_context('file_path', source)
            logger.warning("Skipping %s: %s", source, e)
            return RequestOutcome(source=source, error=e.to_dict())

        path = self.write_result(request, result, source)
        self._claimed.add(path)
        winner = result.winner.vendor if result.winner else None
        logger.debug("Scored %s -> %s (winner: %s)", source, path, winner)
        return RequestOutcome(
            source=source,
            output_path=str(path),
            winner=winner,
            n_quotes=len(request.quotes),
        )

    def run(self, sources: Sequence[str]) -> PipelineResult:
        """Execute the batch."""
        start = time.time()
        show_progress = os.getenv('NO_PROGRESS', '').lower() not in ['1', 'true', 'yes']
        result = PipelineResult(n_inputs=len(sources))
        self._claimed = set()

        valid, invalid = InputValidator.validate_request_paths(list(sources))
        for path in invalid:
            result.outcomes.append(RequestOutcome(
                source=path,
                error={"error_code": "FILE_VALIDATION_FAILED", "message": f"Unusable request path: {path}"},
            ))

        try:
            with section_timer("scoring batch", logger) as elapsed:
                for source in tqdm(valid, desc="Scoring", unit="rfq", disable=not show_progress):
                    result.outcomes.append(self._process_one(source))
        except (ProcessingError, ConfigurationError):
            raise
        except Exception as e:
            exc = ProcessingError(
                f"Unexpected pipeline error: {str(e)}",
                stage="batch_scoring",
            )
            exc.add_context('elapsed_time', time.time() - start)
            raise exc from e

        result.processing_time = elapsed.seconds
        result.rss_mb = self.process.memory_info().rss / (1024 * 1024)

        summary_logger.info(
            "Scored %d/%d requests (%d failed) in %.2f s, RSS %.1f MB",
            result.n_scored, result.n_inputs, result.n_failed,
            result.processing_time, result.rss_mb,
        )
        if result.n_inputs and result.n_scored == 0:
            raise BatchProcessingError(
                "No request could be scored",
                total_requests=result.n_inputs,
                failed_count=result.n_failed,
            )
        return result


def run_scoring_batch(settings: Settings, sources: Sequence[str]) -> PipelineResult:
    """Entry point used by the CLI."""
    return ScoringPipeline(settings).run(sources)
