"""Runs audit checks against a context and folds the results into scores."""

import asyncio
import inspect
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Sequence, Union

from .checks import ALL_CHECKS, Check, get_checks_by_ids
from .config import DEFAULT_SCORING, RunnerSettings, ScoringConfig
from .context import AuditContext, AuditOptions, BusinessInfo
from .models import (
    AuditCheckResult,
    AuditResults,
    AuditSummary,
    Category,
    CheckResult,
    CheckStatus,
    RunMeta,
)
from .scoring import (
    build_category_result,
    calculate_overall_score,
    critical_failures,
    overall_status,
)

logger = logging.getLogger(__name__)

TIMEOUT_DETAILS = "Check timeout"


@dataclass
class RunnerOptions:
    """What to run and how.

    ``check_ids`` wins over ``categories``; with neither, the whole registry
    runs. Unset timeout/worker values come from ``RunnerSettings``.
    """
    categories: Optional[Sequence[Union[Category, str]]] = None
    check_ids: Optional[Sequence[str]] = None
    check_local: bool = True
    check_eeat: bool = True
    industry: Optional[str] = None
    check_timeout_ms: Optional[int] = None
    max_workers: Optional[int] = None


def select_checks(registry: Sequence[Check], options: RunnerOptions) -> list[Check]:
    if options.check_ids:
        return get_checks_by_ids(options.check_ids, registry)
    if options.categories:
        wanted = {Category.parse(c) for c in options.categories}
        return [check for check in registry if check.category in wanted]
    return list(registry)


def _error_result(exc: BaseException) -> CheckResult:
    message = str(exc) or type(exc).__name__
    return CheckResult(passed=False, status=CheckStatus.FAILED, details=f"Error: {message}")


def _release_when_done(worker: asyncio.Future, semaphore: asyncio.Semaphore) -> None:
    def _done(fut: asyncio.Future) -> None:
        if not fut.cancelled():
            # The late outcome is discarded; reading it keeps asyncio from reporting it.
            fut.exception()
        semaphore.release()

    worker.add_done_callback(_done)


class AuditRunner:
    """Executes a selection of checks with per-check isolation.

    A check that raises, times out or returns garbage becomes a failed result;
    ``run`` itself never raises because of a check.
    """

    def __init__(
        self,
        options: Optional[RunnerOptions] = None,
        registry: Sequence[Check] = ALL_CHECKS,
        scoring: ScoringConfig = DEFAULT_SCORING,
        settings: Optional[RunnerSettings] = None,
    ):
        self.options = options or RunnerOptions()
        self.scoring = scoring
        settings = settings or RunnerSettings.from_env()
        self.check_timeout_ms = self.options.check_timeout_ms or settings.check_timeout_ms
        self.max_workers = self.options.max_workers or settings.max_workers
        self.checks = select_checks(registry, self.options)

    @property
    def defaults(self) -> AuditOptions:
        return AuditOptions(
            check_local=self.options.check_local,
            check_eeat=self.options.check_eeat,
            industry=self.options.industry,
        )

    def prepare_context(self, context: AuditContext) -> AuditContext:
        """Fill unset context options from the runner's options."""
        return replace(context, options=context.options.merged_over(self.defaults))

    async def run(self, context: AuditContext) -> AuditResults:
        """Run every selected check and aggregate the results."""
        started = time.perf_counter()
        ctx = self.prepare_context(context)
        # Parse once here; cached_property is not locked against worker threads.
        ctx.soup
        logger.info("Auditing %s with %d checks", context.url, len(self.checks))

        semaphore = asyncio.Semaphore(self.max_workers)
        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="seo-audit")
        try:
            # gather keeps registry order whatever order the checks finish in
            results = await asyncio.gather(
                *(self._run_check(check, ctx, semaphore, executor) for check in self.checks)
            )
        finally:
            # A check stuck past its deadline must not hold up the run.
            executor.shutdown(wait=False, cancel_futures=True)

        elapsed_ms = (time.perf_counter() - started) * 1000
        audit = self.aggregate(context.url, results, elapsed_ms)
        logger.info(
            "Audit of %s finished: score=%d status=%s in %.0fms",
            audit.url, audit.score, audit.status.value, elapsed_ms,
        )
        return audit

    def run_sync(self, context: AuditContext) -> AuditResults:
        """Blocking wrapper around ``run`` for callers without an event loop."""
        return asyncio.run(self.run(context))

    async def _run_check(
        self,
        check: Check,
        ctx: AuditContext,
        semaphore: asyncio.Semaphore,
        executor: ThreadPoolExecutor,
    ) -> AuditCheckResult:
        await semaphore.acquire()
        start = time.perf_counter()
        worker = None
        if not inspect.iscoroutinefunction(check.evaluate):
            # Slots never outnumber threads, so the check starts right away.
            worker = asyncio.wrap_future(executor.submit(check.evaluate, ctx))

        try:
            result = await asyncio.wait_for(
                self._evaluate(check, ctx, worker),
                timeout=self.check_timeout_ms / 1000,
            )
        except asyncio.TimeoutError:
            logger.warning("Check %s timed out after %dms", check.id, self.check_timeout_ms)
            result = CheckResult(passed=False, status=CheckStatus.FAILED, details=TIMEOUT_DETAILS)
        execution_time_ms = (time.perf_counter() - start) * 1000

        if worker is not None and not worker.done():
            # A thread cannot be interrupted; it keeps its slot until it returns.
            _release_when_done(worker, semaphore)
        else:
            semaphore.release()

        logger.debug("Check %s -> %s (%.1fms)", check.id, result.status.value, execution_time_ms)
        return AuditCheckResult(
            check_id=check.id,
            check_name=check.name,
            category=check.category,
            weight=check.weight,
            severity=check.severity,
            passed=result.passed,
            status=result.status,
            details=result.details,
            value=result.value,
            expected=result.expected,
            fix_hint=check.fix_hint,
            execution_time_ms=execution_time_ms,
        )

    @staticmethod
    async def _evaluate(
        check: Check, ctx: AuditContext, worker: Optional[asyncio.Future]
    ) -> CheckResult:
        """Evaluate one check, turning anything it raises into a failed result.

        Only the surrounding deadline may end this with ``TimeoutError``; a
        ``TimeoutError`` raised by the check itself is an ordinary error.
        """
        try:
            if worker is None:
                outcome = await check.evaluate(ctx)
            else:
                # shield: a missed deadline must not mark the running thread as done
                outcome = await asyncio.shield(worker)
                if inspect.isawaitable(outcome):
                    outcome = await outcome
            if not isinstance(outcome, CheckResult):
                raise TypeError(f"check returned {type(outcome).__name__}, expected CheckResult")
        except Exception as exc:
            logger.warning("Check %s failed with %s: %s", check.id, type(exc).__name__, exc)
            return _error_result(exc)
        return outcome

    def aggregate(
        self, url: str, results: Sequence[AuditCheckResult], elapsed_ms: float
    ) -> AuditResults:
        checks = tuple(results)
        categories = {category: build_category_result(category, checks) for category in Category}
        score = calculate_overall_score(categories, self.scoring)
        skipped_count = sum(1 for r in checks if r.skipped)

        summary = AuditSummary(
            total=len(checks),
            passed=sum(1 for r in checks if r.passed),
            failed=sum(1 for r in checks if not r.passed and r.status is CheckStatus.FAILED),
            warnings=sum(1 for r in checks if r.status is CheckStatus.WARNING),
            skipped=skipped_count,
            critical=critical_failures(checks),
        )
        return AuditResults(
            url=url,
            timestamp=datetime.now(timezone.utc).isoformat(),
            score=score,
            status=overall_status(checks, score),
            categories=categories,
            checks=checks,
            summary=summary,
            meta=RunMeta(
                total_execution_time_ms=elapsed_ms,
                checks_run=len(checks) - skipped_count,
                checks_skipped=skipped_count,
            ),
        )


# Convenience runners

async def run_quick_audit(url: str, html: str) -> AuditResults:
    """Run every check with default options."""
    return await AuditRunner().run(AuditContext(url=url, html=html))


async def run_full_audit(url: str, html: str, options: Optional[RunnerOptions] = None) -> AuditResults:
    """Run with local and E-E-A-T checks on, plus whatever ``options`` sets."""
    options = options or RunnerOptions()
    runner = AuditRunner(options)
    context = AuditContext(
        url=url,
        html=html,
        options=AuditOptions(
            check_local=options.check_local,
            check_eeat=options.check_eeat,
            industry=options.industry,
        ),
    )
    return await runner.run(context)


async def run_category_audit(
    url: str, html: str, categories: Sequence[Union[Category, str]]
) -> AuditResults:
    runner = AuditRunner(RunnerOptions(categories=list(categories)))
    return await runner.run(AuditContext(url=url, html=html))


async def run_local_business_audit(url: str, html: str, business: BusinessInfo) -> AuditResults:
    runner = AuditRunner(RunnerOptions(
        check_local=True,
        categories=[Category.TECHNICAL, Category.LOCAL, Category.SCHEMA, Category.EEAT],
    ))
    return await runner.run(AuditContext(url=url, html=html, business=business))


async def run_healthcare_audit(url: str, html: str) -> AuditResults:
    runner = AuditRunner(RunnerOptions(check_eeat=True, industry="healthcare"))
    context = AuditContext(
        url=url,
        html=html,
        options=AuditOptions(check_eeat=True, industry="healthcare"),
    )
    return await runner.run(context)
