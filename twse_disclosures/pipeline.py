"""
Disclosure report pipeline.

Sequence:
1. Bulk fetch the MOPS listing for the date range (fatal on failure)
2. Normalize row keys and index records by company id
3. Resolve every stock id concurrently: match, then fetch the detail table
4. Assemble the report in input order

Only step 1 can fail the run. A stock id whose record is missing or whose
detail page cannot be read is reported as "no data".
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

import requests

from twse_disclosures.config import Settings, require_stock_ids
from twse_disclosures.constants import (
    DEFAULT_MAX_WORKERS,
    DETAIL_BASE_URL,
    DETAIL_TIMEOUT,
    LISTING_TIMEOUT,
    LISTING_URL,
)
from twse_disclosures.domain.models import DisclosureRecord, ResolutionResult, ResolutionStatus
from twse_disclosures.exceptions import FetchError
from twse_disclosures.matching import build_record_index, match_record, to_records
from twse_disclosures.parsing.detail_page import fetch_detail_fragment
from twse_disclosures.parsing.fields import normalize_records
from twse_disclosures.report.assembler import assemble_document
from twse_disclosures.sources.mops import fetch_listing
from twse_disclosures.utils.parallel import execute_parallel
from twse_disclosures.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    IDLE = "idle"
    BULK_FETCHING = "bulk_fetching"
    RESOLVING = "resolving"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ReportRun:
    """Outcome of a pipeline run."""

    state: RunState = RunState.IDLE
    results: list[ResolutionResult] = field(default_factory=list)
    document: str | None = None
    record_count: int = 0
    stats: ExecutionStats = field(default_factory=ExecutionStats)
    error: str | None = None


def resolve_identifier(
    session: requests.Session,
    records: dict[str, DisclosureRecord],
    stock_id: str,
    index: int = 0,
    detail_base_url: str = DETAIL_BASE_URL,
    detail_timeout: float = DETAIL_TIMEOUT,
) -> ResolutionResult:
    """
    Resolve one stock id against the indexed listing.

    Never raises; every failure is expressed as NO_DETAIL or UNMATCHED.
    """
    logger.debug(f"Processing stock ID: {stock_id}")
    record = match_record(records, stock_id)
    if record is None:
        logger.info(f"No data found for stock ID: {stock_id}")
        return ResolutionResult.unmatched(stock_id, index)

    logger.debug(f"Found data for stock ID: {stock_id}. Fetching details...")
    fragment = fetch_detail_fragment(
        session, record.hyperlink, base_url=detail_base_url, timeout=detail_timeout
    )
    if fragment is None:
        logger.info(f"No detail data available for stock ID: {stock_id}")
        return ResolutionResult.no_detail(stock_id, index)

    logger.debug(f"Detail data fetched successfully for stock ID: {stock_id}")
    return ResolutionResult.matched(stock_id, fragment, index)


class DisclosureReportPipeline:
    """
    Bulk fetch, concurrent per-stock resolution, and assembly.

    Args:
        start_date: Listing start date, in the service's format
        end_date: Listing end date, in the service's format
        stock_ids: Stock ids to report on (order is report order); must not be empty
        session: Optional requests session (shared by all requests of the run)
    """

    def __init__(
        self,
        start_date: str,
        end_date: str,
        stock_ids: list[str],
        session: requests.Session | None = None,
        listing_url: str = LISTING_URL,
        detail_base_url: str = DETAIL_BASE_URL,
        listing_timeout: float = LISTING_TIMEOUT,
        detail_timeout: float = DETAIL_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
        show_progress: bool = False,
    ):
        if not stock_ids:
            raise ValueError("stock_ids must not be empty")
        self.start_date = start_date
        self.end_date = end_date
        self.stock_ids = list(stock_ids)
        self.session = session if session is not None else requests.Session()
        self.listing_url = listing_url
        self.detail_base_url = detail_base_url
        self.listing_timeout = listing_timeout
        self.detail_timeout = detail_timeout
        self.max_workers = max_workers
        self.show_progress = show_progress
        self.state = RunState.IDLE

    def _transition(self, state: RunState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state

    def _fetch_records(self) -> dict[str, DisclosureRecord]:
        rows = fetch_listing(
            self.session,
            self.start_date,
            self.end_date,
            url=self.listing_url,
            timeout=self.listing_timeout,
        )
        return build_record_index(to_records(normalize_records(rows)))

    def _resolve_all(
        self, records: dict[str, DisclosureRecord], stats: ExecutionStats
    ) -> list[ResolutionResult]:
        def worker(index: int, stock_id: str) -> ResolutionResult:
            return resolve_identifier(
                self.session,
                records,
                stock_id,
                index,
                detail_base_url=self.detail_base_url,
                detail_timeout=self.detail_timeout,
            )

        def on_error(index: int, stock_id: str, exc: Exception) -> ResolutionResult:
            logger.warning(f"Unexpected error resolving stock ID {stock_id}: {exc}")
            return ResolutionResult.no_detail(stock_id, index)

        logger.info(f"Processing {len(self.stock_ids)} stock IDs...")
        results = execute_parallel(
            self.stock_ids,
            worker,
            max_workers=self.max_workers,
            desc="Resolving stock IDs",
            unit="stock",
            show_progress=self.show_progress,
            error_handler=on_error,
        )

        resolved = []
        for index, stock_id in enumerate(self.stock_ids):
            result = results[index] or ResolutionResult.no_detail(stock_id, index)
            stats.increment(result.status.value)
            resolved.append(result)
        return resolved

    def run(self) -> ReportRun:
        """
        Run the pipeline.

        Returns:
            ReportRun in state DONE with the assembled document

        Raises:
            FetchError: The bulk listing fetch failed; no document is produced
        """
        stats = ExecutionStats(**{status.value: 0 for status in ResolutionStatus})
        run = ReportRun(stats=stats)

        logger.info(f"Starting data fetch for date range: {self.start_date} to {self.end_date}")
        self._transition(RunState.BULK_FETCHING)
        try:
            records = self._fetch_records()
        except FetchError as e:
            self._transition(RunState.FAILED)
            run.state = RunState.FAILED
            run.error = str(e)
            e.run = run
            raise
        run.record_count = len(records)
        logger.info(f"Initial data fetch complete. Received {len(records)} items.")

        self._transition(RunState.RESOLVING)
        run.results = self._resolve_all(records, stats)
        logger.info("All stock IDs processed. Generating HTML content...")

        self._transition(RunState.ASSEMBLING)
        run.document = assemble_document(run.results)

        self._transition(RunState.DONE)
        run.state = RunState.DONE
        counts = stats.to_dict()
        logger.info(
            f"Report ready: {counts['matched']} with details, "
            f"{counts['no_detail']} without details, {counts['unmatched']} not found"
        )
        return run


def build_report(
    settings: Settings,
    session: requests.Session | None = None,
    show_progress: bool = False,
) -> ReportRun:
    """
    Run the pipeline from settings.

    Raises:
        ValueError: No stock ids configured
        FetchError: The bulk listing fetch failed
    """
    pipeline = DisclosureReportPipeline(
        start_date=settings.start_date,
        end_date=settings.end_date,
        stock_ids=require_stock_ids(settings),
        session=session,
        listing_url=settings.listing_url,
        detail_base_url=settings.detail_base_url,
        listing_timeout=settings.request_timeout,
        detail_timeout=settings.detail_timeout,
        max_workers=settings.max_workers,
        show_progress=show_progress,
    )
    return pipeline.run()
