"""Client state as immutable records updated by a reducer.

Every user interaction becomes an action; ``reduce`` returns a new
``AppState`` and never mutates the old one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Union

from client.validation import can_submit, field_errors

FORM_FIELDS = ("name", "email", "phone", "message")


@dataclass(frozen=True)
class ContactForm:
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""

    def to_payload(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in FORM_FIELDS}


@dataclass(frozen=True)
class AppState:
    contacts: tuple[dict[str, Any], ...] = ()
    form: ContactForm = field(default_factory=ContactForm)
    editing_id: str | None = None
    search: str = ""
    loading: bool = False

    @property
    def phase(self) -> str:
        if self.loading:
            return "submitting"
        if self.editing_id is not None:
            return "editing"
        return "idle"

    @property
    def submit_enabled(self) -> bool:
        return not self.loading and can_submit(self.form)

    @property
    def errors(self) -> dict[str, str]:
        return field_errors(self.form)


@dataclass(frozen=True)
class FieldChanged:
    field: str
    value: str


@dataclass(frozen=True)
class StartEdit:
    contact: dict[str, Any]


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class SubmitFailed:
    pass


@dataclass(frozen=True)
class ContactsLoaded:
    contacts: tuple[dict[str, Any], ...]


@dataclass(frozen=True)
class SearchChanged:
    term: str


@dataclass(frozen=True)
class ClearSearch:
    pass


Action = Union[
    FieldChanged,
    StartEdit,
    CancelEdit,
    SubmitStarted,
    SubmitSucceeded,
    SubmitFailed,
    ContactsLoaded,
    SearchChanged,
    ClearSearch,
]


def reduce(state: AppState, action: Action) -> AppState:
    if isinstance(action, FieldChanged):
        if action.field not in FORM_FIELDS:
            raise ValueError(f"unknown form field {action.field!r}")
        return replace(state, form=replace(state.form, **{action.field: action.value}))
    if isinstance(action, StartEdit):
        contact = action.contact
        form = ContactForm(**{name: contact.get(name) or "" for name in FORM_FIELDS})
        return replace(state, form=form, editing_id=contact["id"])
    if isinstance(action, CancelEdit):
        return replace(state, form=ContactForm(), editing_id=None)
    if isinstance(action, SubmitStarted):
        return replace(state, loading=True)
    if isinstance(action, SubmitSucceeded):
        return replace(state, loading=False, form=ContactForm(), editing_id=None)
    if isinstance(action, SubmitFailed):
        return replace(state, loading=False)
    if isinstance(action, ContactsLoaded):
        return replace(state, contacts=tuple(action.contacts))
    if isinstance(action, SearchChanged):
        return replace(state, search=action.term)
    if isinstance(action, ClearSearch):
        return replace(state, search="")
    raise TypeError(f"unsupported action {action!r}")


def matches(contact: dict[str, Any], term: str) -> bool:
    """Case-insensitive match on name, raw substring match on phone."""
    name = contact.get("name") or ""
    phone = contact.get("phone") or ""
    return term.lower() in name.lower() or term in phone


def visible_contacts(state: AppState) -> list[dict[str, Any]]:
    if not state.search:
        return list(state.contacts)
    return [c for c in state.contacts if matches(c, state.search)]
