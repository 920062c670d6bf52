"""Command line interface for debt-tracker.

Debtor data lives only in memory for the duration of one command: ``demo``
seeds sample debtors and prints every view, ``shell`` runs an interactive
session. Only the login flag survives between runs.
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
import webbrowser
from datetime import date
from typing import Sequence, TextIO

from debt_tracker.auth import SessionStore
from debt_tracker.config import TrackerConfig
from debt_tracker.exceptions import DebtorNotFoundError, DebtTrackerError, ValidationError
from debt_tracker.finance import calculate_monthly_payment, format_brl
from debt_tracker.forms import form_fields, parse_decimal
from debt_tracker.generators import DebtorGenerator
from debt_tracker.logging import setup_logging
from debt_tracker.messaging import reminder_link
from debt_tracker.models import ContactKind
from debt_tracker.store import DebtorStore
from debt_tracker.ui import AppState, ConsoleRenderer, Modal
from debt_tracker.validation import get_contact_strategy

logger = logging.getLogger(__name__)

# Shell field aliases -> form field names
FIELD_ALIASES = {
    "name": "name",
    "nome": "name",
    "contact": "contact",
    "cpf": "contact",
    "phone": "contact",
    "telefone": "contact",
    "amount": "amount",
    "valor": "amount",
    "installments": "installments",
    "parcelas": "installments",
    "rate": "interest_rate",
    "interest_rate": "interest_rate",
    "juros": "interest_rate",
    "due": "due_date",
    "due_date": "due_date",
    "vencimento": "due_date",
}

SHELL_HELP = """\
Comandos:
  add name=.. contact=.. amount=.. installments=.. rate=.. due=YYYY-MM-DD
  edit ID campo=valor ...
  pay ID | pay-total ID | delete ID
  list | overdue | report [MES 1-12] | remind ID | dump
  help | quit"""


def _month_index(value: str) -> int:
    """argparse type: calendar month 1-12 to index 0-11."""
    try:
        month = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid month: {value!r}") from None
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month must be between 1 and 12, got {month}")
    return month - 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debt-tracker",
        description="Track personal loans, installments and overdue debtors",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Start a session")
    login.add_argument("username")
    login.add_argument("password")

    sub.add_parser("logout", help="End the session")
    sub.add_parser("whoami", help="Show whether a session is active")

    amortize = sub.add_parser("amortize", help="Compute the fixed monthly payment")
    amortize.add_argument("amount", help="Principal, e.g. 1200 or 1.200,00")
    amortize.add_argument("rate", help="Monthly interest in percent, e.g. 2.5")
    amortize.add_argument("installments", type=int, help="Number of installments")

    check = sub.add_parser("check-contact", help="Format and validate a CPF or phone")
    check.add_argument("value")
    check.add_argument(
        "--kind",
        type=str,
        choices=[k.value for k in ContactKind],
        default=None,
        help="Contact kind (default: DEBT_TRACKER_CONTACT_KIND or CPF)",
    )

    demo = sub.add_parser("demo", help="Seed sample debtors and print every view")
    demo.add_argument("--count", type=int, default=8, help="Number of debtors (default: 8)")
    demo.add_argument("--seed", type=int, default=None, help="Random seed (default: SEED)")
    demo.add_argument(
        "--month",
        type=_month_index,
        default=None,
        help="Report month 1-12 (default: current month)",
    )
    demo.add_argument("--json", action="store_true", help="Also dump the debtors as JSON")

    shell = sub.add_parser("shell", help="Interactive session (data is lost on exit)")
    shell.add_argument(
        "--open-links",
        action="store_true",
        help="Open reminder links in the browser",
    )
    return parser


class Shell:
    """Line-oriented session driving an ``AppState``."""

    def __init__(
        self,
        state: AppState,
        renderer: ConsoleRenderer,
        config: TrackerConfig,
        today: date | None = None,
        open_links: bool = False,
    ) -> None:
        self.state = state
        self.renderer = renderer
        self.config = config
        self.today = today
        self.open_links = open_links

    def run(self, lines: TextIO) -> None:
        self.renderer.write(SHELL_HELP)
        for raw in lines:
            if not self.handle(raw):
                break

    def handle(self, raw: str) -> bool:
        """Run one command line; False ends the session."""
        try:
            parts = shlex.split(raw)
        except ValueError as e:
            self.renderer.write(f"Erro: {e}")
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in ("quit", "exit", "sair"):
            return False

        try:
            self._dispatch(command, args)
        except DebtTrackerError as e:
            self.renderer.write(f"Erro: {e}")
        return True

    def _dispatch(self, command: str, args: list[str]) -> None:
        if command == "help":
            self.renderer.write(SHELL_HELP)
        elif command == "add":
            self._submit(Modal.ADD, None, args)
        elif command == "edit":
            debtor_id = self._resolve(args)
            self._submit(Modal.EDIT, debtor_id, args[1:])
        elif command == "pay":
            self.state = self.state.pay_installment(self._resolve(args))
        elif command == "pay-total":
            self.state = self.state.pay_total(self._resolve(args))
        elif command == "delete":
            self.state = self.state.delete_debtor(self._resolve(args))
        elif command == "list":
            self.renderer.write_dashboard(
                self.state.debtors, self.state.summary(self.today), self.today
            )
        elif command == "overdue":
            self.renderer.write_overdue(self.state.overdue(self.today))
        elif command == "report":
            if args:
                try:
                    self.state = self.state.select_month(int(args[0]) - 1)
                except ValueError:
                    raise ValidationError(f"Invalid month: {args[0]!r}") from None
            self.renderer.write_report(self.state.report(self.today))
        elif command == "remind":
            link = reminder_link(self.state.store.get(self._resolve(args)), self.config.messaging)
            self.renderer.write(link)
            if self.open_links:
                webbrowser.open_new_tab(link)
        elif command == "dump":
            self.renderer.dump_json(self.state.debtors)
        else:
            self.renderer.write(f"Comando desconhecido: {command}")

    def _resolve(self, args: list[str]) -> str:
        """Match a full id or a unique id prefix (as shown in the table)."""
        if not args:
            raise ValidationError("Informe o ID do devedor")
        prefix = args[0]
        matches = [d.debtor_id for d in self.state.debtors if d.debtor_id.startswith(prefix)]
        if len(matches) != 1:
            raise DebtorNotFoundError(prefix)
        return matches[0]

    def _submit(self, modal: Modal, debtor_id: str | None, args: list[str]) -> None:
        fields = form_fields(self.state.store.get(debtor_id)) if debtor_id else {}
        for arg in args:
            key, sep, value = arg.partition("=")
            name = FIELD_ALIASES.get(key.lower())
            if not sep or name is None:
                raise ValidationError(f"Campo inválido: {arg!r}")
            fields[name] = value

        before = self.state.store
        self.state = self.state.open_modal(modal, debtor_id).submit_debtor_form(fields)
        if self.state.store is before:
            # Blocked submissions leave the form open and say nothing
            return
        self.renderer.write_warnings(self.state.warnings)
        if modal == Modal.ADD:
            self.renderer.write(f"Adicionado: {self.state.debtors[-1].debtor_id[:8]}")


def _require_session(sessions: SessionStore, out: TextIO) -> bool:
    if sessions.is_authenticated():
        return True
    print("Faça login primeiro: debt-tracker login USUARIO SENHA", file=out)
    return False


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    config: TrackerConfig | None = None,
) -> int:
    """Main entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    try:
        config = config or TrackerConfig.from_env()
        setup_logging(level=args.log_level or config.log_level, format_type=config.log_format)
        return _run(args, config, stdin or sys.stdin, out)
    except DebtTrackerError as e:
        logger.debug(
            "Command %s failed", args.command, exc_info=True, extra={"command": args.command}
        )
        print(str(e), file=out)
        return 1


def _run(args: argparse.Namespace, config: TrackerConfig, stdin: TextIO, out: TextIO) -> int:
    sessions = SessionStore(config.auth)
    renderer = ConsoleRenderer(out, config.messaging)

    if args.command == "login":
        sessions.login(args.username, args.password)
        print("Login realizado", file=out)
        return 0

    if args.command == "logout":
        sessions.logout()
        print("Sessão encerrada", file=out)
        return 0

    if args.command == "whoami":
        print("autenticado" if sessions.is_authenticated() else "não autenticado", file=out)
        return 0

    if args.command == "amortize":
        principal = parse_decimal(args.amount)
        rate = parse_decimal(args.rate)
        if principal is None or rate is None:
            raise ValidationError("Amount and rate must be numbers")
        payment = calculate_monthly_payment(principal, rate, args.installments)
        print(f"Valor/Mês: {format_brl(payment)}", file=out)
        print(f"Total:     {format_brl(payment * args.installments)}", file=out)
        return 0

    if args.command == "check-contact":
        strategy = get_contact_strategy(args.kind or config.contact_kind)
        formatted = strategy.format(args.value)
        valid = strategy.is_valid(formatted)
        print(f"{formatted}: {'válido' if valid else 'inválido'}", file=out)
        return 0 if valid else 1

    if not _require_session(sessions, out):
        return 1

    if args.command == "demo":
        today = date.today()
        generator = DebtorGenerator(
            seed=args.seed if args.seed is not None else config.seed,
            contact_kind=config.contact_kind,
        )
        state = AppState(
            store=generator.populate(DebtorStore(), args.count, today),
            contact_kind=config.contact_kind,
        )
        if args.month is not None:
            state = state.select_month(args.month)

        renderer.write_dashboard(state.debtors, state.summary(today), today)
        renderer.write_overdue(state.overdue(today))
        renderer.write_report(state.report(today))
        if args.json:
            renderer.dump_json(state.debtors)
        return 0

    # shell
    shell = Shell(
        AppState(contact_kind=config.contact_kind),
        renderer,
        config,
        open_links=args.open_links,
    )
    shell.run(stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())
