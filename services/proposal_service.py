from __future__ import annotations

from typing import Callable, Iterable

from core.pricing import QuoteBreakdown, get_service_definition
from schemas.imports import ServiceId
from schemas.quote import ProposalLine, ProposalSummary
from services.quote_session import CalculatorSession


def summarize_quotes(quotes: Iterable[QuoteBreakdown]) -> ProposalSummary:
    """Sum service quotes into proposal totals; inactive quotes are skipped."""
    lines: list[ProposalLine] = []
    for quote in quotes:
        if not quote.is_active:
            continue
        lines.append(
            ProposalLine(
                service_id=quote.service_id,
                display_name=get_service_definition(quote.service_id).display_name,
                frequency=quote.frequency,
                contract_months=quote.contract_months,
                per_visit=quote.per_visit,
                first_period_total=quote.first_period_total,
                monthly_recurring=quote.monthly_recurring,
                contract_total=quote.contract_total,
            )
        )

    return ProposalSummary(
        lines=lines,
        service_count=len(lines),
        per_visit_total=sum(line.per_visit for line in lines),
        first_period_total=sum(line.first_period_total for line in lines),
        monthly_recurring_total=sum(line.monthly_recurring for line in lines),
        contract_total=sum(line.contract_total for line in lines),
    )


class ProposalAggregator:
    """Keeps the latest quote emitted by each tracked calculator."""

    def __init__(self) -> None:
        self._quotes: dict[ServiceId, QuoteBreakdown] = {}
        self._unsubscribers: dict[ServiceId, Callable[[], None]] = {}

    def receive(self, quote: QuoteBreakdown) -> None:
        self._quotes[quote.service_id] = quote

    def track(self, session: CalculatorSession) -> None:
        self.untrack(session.service_id)
        self._unsubscribers[session.service_id] = session.subscribe(self.receive)
        self.receive(session.quote)

    def untrack(self, service_id: ServiceId) -> None:
        unsubscribe = self._unsubscribers.pop(service_id, None)
        if unsubscribe is not None:
            unsubscribe()
        self._quotes.pop(service_id, None)

    def quotes(self) -> list[QuoteBreakdown]:
        return list(self._quotes.values())

    def summary(self) -> ProposalSummary:
        return summarize_quotes(self._quotes.values())
