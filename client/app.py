"""Client controller tying the reducer to the contacts API."""

from __future__ import annotations

import logging
from typing import Any, Callable

from client import state as st
from client.api import ApiError, ContactsClient

DELETE_PROMPT = "Are you sure you want to delete this contact?"
SAVE_ERROR = "Error saving contact"
DELETE_ERROR = "Error deleting contact"


class ContactApp:
    """Owns the current AppState and performs the network side effects.

    After every successful mutation the whole list is fetched again; the
    result of the mutation itself is not merged locally.
    """

    def __init__(
        self,
        api: ContactsClient,
        confirm: Callable[[str], bool] = lambda prompt: True,
        alert: Callable[[str], None] = print,
    ) -> None:
        self.api = api
        self.confirm = confirm
        self.alert = alert
        self.state = st.AppState()

    def dispatch(self, action: st.Action) -> st.AppState:
        self.state = st.reduce(self.state, action)
        return self.state

    def refresh(self) -> st.AppState:
        # list failures are left to the caller
        contacts = self.api.list_contacts()
        return self.dispatch(st.ContactsLoaded(tuple(contacts)))

    def change(self, field: str, value: str) -> st.AppState:
        return self.dispatch(st.FieldChanged(field, value))

    def start_edit(self, contact_id: str) -> st.AppState:
        for contact in self.state.contacts:
            if contact["id"] == contact_id:
                return self.dispatch(st.StartEdit(contact))
        raise KeyError(contact_id)

    def cancel_edit(self) -> st.AppState:
        return self.dispatch(st.CancelEdit())

    def search(self, term: str) -> st.AppState:
        return self.dispatch(st.SearchChanged(term))

    def clear_search(self) -> st.AppState:
        return self.dispatch(st.ClearSearch())

    def visible(self) -> list[dict[str, Any]]:
        return st.visible_contacts(self.state)

    def submit(self) -> bool:
        """Create or update depending on the edit target; True on success."""
        if not self.state.submit_enabled:
            return False
        editing_id = self.state.editing_id
        payload = self.state.form.to_payload()
        self.dispatch(st.SubmitStarted())
        try:
            if editing_id is not None:
                self.api.update_contact(editing_id, payload)
            else:
                self.api.create_contact(payload)
        except ApiError as exc:
            logging.warning("saving contact failed: %s", exc)
            self.dispatch(st.SubmitFailed())
            self.alert(SAVE_ERROR)
            return False
        self.dispatch(st.SubmitSucceeded())
        self.refresh()
        return True

    def delete(self, contact_id: str) -> bool:
        if not self.confirm(DELETE_PROMPT):
            return False
        try:
            self.api.delete_contact(contact_id)
        except ApiError as exc:
            logging.warning("deleting contact %s failed: %s", contact_id, exc)
            self.alert(DELETE_ERROR)
            return False
        self.refresh()
        return True
