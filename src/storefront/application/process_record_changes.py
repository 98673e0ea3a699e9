"""Application service: Process Record Changes use case.

Entry point for the change runtime.  The runtime calls this once per
lifecycle point with the batch it holds; persisting or discarding the
records afterwards is up to the runtime.
"""

from __future__ import annotations

from storefront.application.dto import ChangeReportDTO
from storefront.application.mappers import result_to_report
from storefront.domain.model.change_batch import ChangeBatch, TriggerContext
from storefront.domain.repository.order_totals_repository import OrderTotalsRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.record_change_pipeline import RecordChangePipeline


class ProcessRecordChangesHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_totals_repo: OrderTotalsRepository,
    ) -> None:
        self._pipeline = RecordChangePipeline(product_repo, order_totals_repo)

    def handle(self, batch: ChangeBatch, context: TriggerContext) -> ChangeReportDTO:
        result = self._pipeline.run(batch, context)
        return result_to_report(result)
