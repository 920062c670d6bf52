"""Plain-text rendering of the dashboard, overdue list and monthly report."""

from __future__ import annotations

import json
import sys
from datetime import date, datetime
from typing import Any, Iterable, Sequence, TextIO

from debt_tracker.config import MessagingConfig
from debt_tracker.exceptions import InvalidDebtorStateError
from debt_tracker.finance import format_brl, format_date_br, format_rate
from debt_tracker.messaging import reminder_link
from debt_tracker.models import Debtor
from debt_tracker.reports import DashboardSummary, MonthlyReport
from debt_tracker.serialization import to_dict
from debt_tracker.status import effective_status


def render_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Left-aligned text table with a header rule."""
    body = [[str(cell) for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in body:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    out = [line(headers), line(["-" * w for w in widths])]
    out.extend(line(row) for row in body)
    return "\n".join(out)


def render_debtors(debtors: Sequence[Debtor], today: date | datetime | None = None) -> str:
    if not debtors:
        return "Nenhum devedor cadastrado"

    headers = [
        "ID",
        "Nome",
        "Contato",
        "Valor Total",
        "Parcelas Pagas",
        "Juros",
        "Valor/Mês",
        "Saldo Devedor",
        "Vencimento",
        "Status",
    ]
    rows = [
        [
            d.debtor_id[:8],
            d.name,
            d.contact,
            format_brl(d.amount),
            f"{d.paid_installments}/{d.installments}",
            format_rate(d.interest_rate),
            format_brl(d.monthly_payment),
            format_brl(d.outstanding_balance),
            format_date_br(d.due_date),
            effective_status(d, today).label,
        ]
        for d in debtors
    ]
    return render_table(headers, rows)


def render_summary(summary: DashboardSummary) -> str:
    noun = "devedor" if summary.debtor_count == 1 else "devedores"
    late = "Pagamento atrasado" if summary.overdue_count == 1 else "Pagamentos atrasados"
    return "\n".join(
        [
            f"Total Emprestado: {format_brl(summary.total_lent)} ({summary.debtor_count} {noun})",
            f"A Receber/Mês:    {format_brl(summary.monthly_receivable)}",
            f"Valor Pendente:   {format_brl(summary.pending_amount)}",
            f"Atrasados:        {summary.overdue_count} ({late})",
        ]
    )


def render_overdue(
    debtors: Sequence[Debtor], messaging: MessagingConfig | None = None
) -> str:
    if not debtors:
        return "Nenhum devedor atrasado no momento."

    rows = []
    for d in debtors:
        try:
            link = reminder_link(d, messaging)
        except InvalidDebtorStateError:
            link = "-"
        rows.append([d.name, format_date_br(d.due_date), format_brl(d.monthly_payment), d.contact, link])
    return render_table(["Nome", "Vencimento", "Valor Parcela", "Contato", "Cobrar"], rows)


def render_report(report: MonthlyReport) -> str:
    lines = [
        f"Extrato Mensal: {report.month_name}",
        f"Total a Receber no Mês: {format_brl(report.month_total)}",
        f"Já Recebido (Pago):     {format_brl(report.month_paid)}",
        "",
    ]
    if not report.entries:
        lines.append("Nenhum vencimento para este mês.")
        return "\n".join(lines)

    rows = [
        [
            f"{e.debtor.name} ({e.installment_number}/{e.debtor.installments})",
            format_date_br(e.projected_due_date),
            format_brl(e.amount),
            "Pago" if e.is_paid_in_month else "",
        ]
        for e in report.entries
    ]
    lines.append(render_table(["Devedor", "Vencimento", "Parcela", ""], rows))
    return "\n".join(lines)


class ConsoleRenderer:
    """Write rendered views to a text stream (stdout by default)."""

    def __init__(
        self,
        stream: TextIO | None = None,
        messaging: MessagingConfig | None = None,
    ) -> None:
        """Initialize console renderer.

        Parameters
        ----------
        stream : TextIO | None
            Destination; defaults to ``sys.stdout`` at write time.
        messaging : MessagingConfig | None
            Settings for the reminder links in the overdue list.
        """
        self._stream = stream
        self.messaging = messaging or MessagingConfig()

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def write(self, text: str = "") -> None:
        print(text, file=self.stream)

    def section(self, title: str) -> None:
        self.write(f"\n{'=' * 60}")
        self.write(title)
        self.write("=" * 60)

    def write_dashboard(
        self,
        debtors: Sequence[Debtor],
        summary: DashboardSummary,
        today: date | datetime | None = None,
    ) -> None:
        self.section("Sistema de Empréstimos")
        self.write(render_summary(summary))
        self.write()
        self.write(render_debtors(debtors, today))

    def write_overdue(self, debtors: Sequence[Debtor]) -> None:
        self.section("Devedores em Atraso")
        self.write(render_overdue(debtors, self.messaging))

    def write_report(self, report: MonthlyReport) -> None:
        self.section("Extrato Mensal")
        self.write(render_report(report))

    def write_warnings(self, warnings: Iterable[tuple[str, str]]) -> None:
        for field_name, message in warnings:
            self.write(f"Aviso ({field_name}): {message}")

    def dump_json(self, records: Iterable[Any], pretty: bool = True) -> None:
        """Debug dump of records as JSON, one document per record."""
        for record in records:
            data = to_dict(record)
            if pretty:
                self.write(json.dumps(data, indent=2, ensure_ascii=False, default=str))
            else:
                self.write(json.dumps(data, ensure_ascii=False, default=str))
