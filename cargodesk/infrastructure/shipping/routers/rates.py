from fastapi import APIRouter, Depends

from cargodesk.application.shipping.use_cases import RateQuoteUseCase
from cargodesk.core import container
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.identity.dependencies import CurrentUser, customer_scope
from cargodesk.infrastructure.shipping.schemas import RateQuoteRequest, RateQuoteResponse

router = APIRouter(prefix="/rates", tags=["rates"])


@router.post("/quote")
def quote_rates(
    current_user: CurrentUser,
    request: RateQuoteRequest,
    use_case: RateQuoteUseCase = Depends(inject_use_case(container.rate_quote_use_case)),
) -> RateQuoteResponse:
    """
    Price a parcel for every available service.

    Customers are always quoted with their own discounts. Staff get list
    prices unless they name a customer. Quotes stay valid for 24 hours.
    """
    scope = customer_scope(current_user)
    result = use_case.quote(
        customer_id=scope if scope is not None else request.customer_id,
        **request.model_dump(exclude={"customer_id"}),
    )
    return RateQuoteResponse.from_result(result)
