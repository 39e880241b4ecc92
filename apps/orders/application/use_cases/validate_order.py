"""
Order diagnostic use case.
"""
import logging
from dataclasses import dataclass

from shared.application import UseCase, UseCaseResult
from ...domain.exceptions import OrderNotFoundError
from ...domain.repositories import OrderRepository
from ..dtos import InvariantReportDTO, OrderIdDTO

logger = logging.getLogger(__name__)


@dataclass
class ValidateOrderUseCase(UseCase[OrderIdDTO, InvariantReportDTO]):
    """Re-verify a stored order's numeric and structural invariants. Read-only."""

    order_repository: OrderRepository

    def execute(self, input_dto: OrderIdDTO) -> UseCaseResult[InvariantReportDTO]:
        order = self.order_repository.find_by_id(input_dto.order_id)
        if order is None:
            return UseCaseResult.from_error(OrderNotFoundError(str(input_dto.order_id)))

        violations = order.invariant_violations()
        for violation in violations:
            logger.warning(f"Order {order.number} violates {violation.code}: {violation.message}")

        return UseCaseResult.ok(InvariantReportDTO(
            order_id=order.id,
            valid=not violations,
            violations=[
                {
                    'code': v.code,
                    'message': v.message,
                    'expected': v.expected,
                    'actual': v.actual,
                }
                for v in violations
            ],
        ))
