"""Domain -> DTO mapping shared by the application handlers."""

from __future__ import annotations

from storefront.application.dto import (
    CartLineDTO,
    CartSummaryDTO,
    ChangeReportDTO,
    ProductDTO,
    RecordOutcomeDTO,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.service.record_change_pipeline import PipelineResult


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        unit_price=str(product.unit_price),
        stock_quantity=product.stock_quantity,
        has_stock=product.has_stock,
        is_out_of_stock=product.is_out_of_stock,
    )


def cart_to_summary(cart: Cart) -> CartSummaryDTO:
    return CartSummaryDTO(
        cart_items=[
            CartLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in cart.lines
        ],
        total_items=cart.item_count,
        total_value=str(cart.total),
    )


def result_to_report(result: PipelineResult) -> ChangeReportDTO:
    return ChangeReportDTO(
        phase=result.phase.value,
        outcomes=[
            RecordOutcomeDTO(
                record_id=outcome.record_id,
                valid=outcome.valid,
                reason=outcome.reason,
                line_total=None if outcome.line_total is None else str(outcome.line_total),
            )
            for outcome in result.outcomes
        ],
        skipped_ids=list(result.skipped_ids),
        order_totals={
            order_id: str(total) for order_id, total in result.order_totals.items()
        },
    )
