# ABOUTME: Runs the verifier over every seed id, one at a time, and collects the results
# ABOUTME: Throttles between seeds and keeps a de-duplicated list of failing ids

from collections import Counter
from collections.abc import Callable, Iterable

from pydantic import BaseModel, Field

from image_inspector.config import Config, get_config
from image_inspector.content.markup import dedup
from image_inspector.content.models import ContentRecord, Verdict
from image_inspector.content.resolver import ContentResolver
from image_inspector.content.verifier import ContentVerifier
from image_inspector.utils.logging import get_logger, with_seed_context
from image_inspector.utils.throttle import Throttle

VerdictObserver = Callable[[str, Verdict], None]


class InspectionReport(BaseModel):
    """Outcome of one inspection run."""

    verdicts: dict[str, Verdict] = Field(default_factory=dict, description="Verdict per seed id, in run order")
    failing_ids: list[str] = Field(default_factory=list, description="Failing ids in the order they were found")
    encountered_ids: list[str] = Field(default_factory=list, description="Every id resolved during the run")

    @property
    def broken_ids(self) -> list[str]:
        return dedup(self.failing_ids)

    @property
    def safe_count(self) -> int:
        return sum(1 for verdict in self.verdicts.values() if verdict.is_safe)

    def counts(self) -> dict[str, int]:
        """Number of seeds per verdict kind."""
        return dict(Counter(verdict.kind for verdict in self.verdicts.values()))


class VerificationDriver:
    """Verifies seed ids sequentially against one resolver."""

    def __init__(
        self,
        resolver: ContentResolver,
        config: Config | None = None,
        throttle: Throttle | None = None,
        on_verdict: VerdictObserver | None = None,
    ):
        self.config = config or get_config()
        self.throttle = throttle or Throttle(self.config.delay_seconds)
        self.on_verdict = on_verdict
        self.report = InspectionReport()
        self.verifier = ContentVerifier(resolver, self.config, on_resolved=self._record_encountered)
        self.logger = get_logger(__name__)

    def _record_encountered(self, record: ContentRecord) -> None:
        self.report.encountered_ids.append(record.id)

    async def run(self, seed_ids: Iterable[str]) -> InspectionReport:
        """Verify every seed id and return the accumulated report."""
        for seed_id in seed_ids:
            await self.throttle.wait()
            await self.verify_seed(seed_id)

        self.logger.info(
            "Inspection finished",
            seeds=len(self.report.verdicts),
            safe=self.report.safe_count,
            broken=len(self.report.broken_ids),
        )
        return self.report

    async def verify_seed(self, seed_id: str) -> Verdict:
        with with_seed_context(seed_id) as logger:
            verdict = await self.verifier.verify(seed_id)
            self.report.verdicts[seed_id] = verdict

            if verdict.is_safe:
                logger.info("Seed is safe")
            else:
                self.report.failing_ids.append(verdict.failing_id)
                logger.warning("Seed failed verification", verdict=verdict.kind, failing_id=verdict.failing_id)

        if self.on_verdict is not None:
            self.on_verdict(seed_id, verdict)
        return verdict
