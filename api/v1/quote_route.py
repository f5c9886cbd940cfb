from __future__ import annotations

from fastapi import APIRouter, Path

from core.response_envelope import document_response
from schemas.quote import ProposalRequest, QuoteOut, QuoteRequest, QuoteResult
from services.pricing_service import calculate_service_quote, list_service_catalog, summarize_proposal

router = APIRouter(tags=["Quotes"])


@router.get("/quotes/services")
@document_response(
    message="Service catalog fetched successfully",
    success_example=[
        {
            "service_id": "saniscrub",
            "display_name": "SaniScrub",
            "default_frequency": "monthly",
            "frequencies": ["oneTime", "weekly", "monthly", "quarterly"],
        }
    ],
)
async def list_services():
    return list_service_catalog()


@router.post("/quotes/{service_id}")
@document_response(
    message="Quote calculated successfully",
    response_codes={404: "Unknown service", 422: "Invalid form"},
)
async def quote_service(
    payload: QuoteRequest,
    service_id: str = Path(..., description="Service key, e.g. saniscrub or greaseTrap."),
):
    result = await calculate_service_quote(
        service_id,
        payload.form,
        use_remote_config=payload.use_remote_config,
    )
    return QuoteResult(
        quote=QuoteOut.from_breakdown(result.quote),
        config_source=result.config.source,
        config_issues=list(result.config.issues),
        config_error=result.config_error,
    )


@router.post("/proposals/summary")
@document_response(message="Proposal summary calculated successfully")
async def proposal_summary(payload: ProposalRequest):
    return await summarize_proposal(payload)
