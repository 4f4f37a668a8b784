"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class UnresolvedAccountsError(ValidationError):
    """Some statement lines have no account; nothing may be submitted."""

    def __init__(self, labels: list[str]):
        self.labels = list(labels)
        super().__init__(unresolved_accounts(self.labels))


class UnbalancedEntryError(DomainError):
    """A built journal entry does not balance."""

    def __init__(self, draft):
        self.draft = draft
        super().__init__(
            unbalanced_entry(draft.piece_reference, draft.total_debit, draft.total_credit)
        )


class SubmissionError(DomainError):
    """The ledger store rejected an entry part-way through a batch."""

    def __init__(self, report):
        self.report = report
        super().__init__(submission_halted(report.submitted, report.not_attempted, report.error))


def account_not_found(company_id: int, number: str) -> str:
    """Return message for missing ledger account."""
    return f"Account {number} not found for company {company_id}"


def duplicate_account(company_id: int, number: str) -> str:
    """Return message for a duplicate ledger account number."""
    return f"Account {number} already exists for company {company_id}"


def association_not_found(company_id: int, label: str) -> str:
    """Return message for missing label association."""
    return f"No association for label '{label}' in company {company_id}"


def record_not_found(record_id: str) -> str:
    """Return message for an unknown session record."""
    return f"Statement line '{record_id}' not found in this import"


def unresolved_accounts(labels: list[str]) -> str:
    """Return message listing labels that still need an account."""
    count = len(labels)
    quoted = ", ".join(f"'{label}'" for label in labels)
    return (
        f"{count} label{'s' if count != 1 else ''} without an account: {quoted}. "
        "Assign an account to every statement line before importing."
    )


def unbalanced_entry(piece_reference: str, total_debit, total_credit) -> str:
    """Return message for a draft whose debit and credit totals differ."""
    return (
        f"Entry '{piece_reference}' is unbalanced: "
        f"debit {total_debit} != credit {total_credit}"
    )


def submission_halted(submitted: int, not_attempted: int, error) -> str:
    """Return message when sequential submission stops on a failure."""
    return (
        f"Import halted after {submitted} entr{'ies' if submitted != 1 else 'y'}: {error}. "
        f"{not_attempted} entr{'ies' if not_attempted != 1 else 'y'} not attempted."
    )
