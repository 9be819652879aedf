"""Terminal front end: the contact form and list on one screen."""

from __future__ import annotations

import argparse
import logging
import shlex
from typing import Callable

from client.api import CONTACTS_API_URL, ApiError, ContactsClient
from client.app import ContactApp
from client.state import FORM_FIELDS

HELP = (
    "commands: name|email|phone|message <text>, submit, edit <n>, cancel, "
    "delete <n>, search <term>, clear, refresh, help, quit"
)

LABELS = {
    "name": "Full Name*",
    "email": "Email*",
    "phone": "Phone Number*",
    "message": "Message",
}


def render_list(app: ContactApp) -> str:
    lines = ["Contact List"]
    if app.state.search:
        lines[0] += f" (search: {app.state.search!r})"
    contacts = app.visible()
    if not app.state.contacts:
        lines.append("  No contacts found.")
    elif not contacts:
        lines.append("  No contacts match your search. Type 'clear' to clear search.")
    for index, contact in enumerate(contacts, start=1):
        marker = "*" if contact["id"] == app.state.editing_id else " "
        lines.append(f"{marker}{index:>3}. {contact['name']}")
        lines.append(f"      {contact['email']} | {contact['phone']}")
        if contact.get("message"):
            lines.append(f'      "{contact["message"]}"')
    return "\n".join(lines)


def render_form(app: ContactApp) -> str:
    s = app.state
    title = "Edit Contact" if s.phase == "editing" else "New Contact"
    lines = [title]
    errors = s.errors
    for name in FORM_FIELDS:
        lines.append(f"  {LABELS[name]:<14} {getattr(s.form, name)}")
        if name in errors:
            lines.append(f"    ! {errors[name]}")
    if s.loading:
        button = "Saving..."
    elif s.phase == "editing":
        button = "Update Contact"
    else:
        button = "Submit Contact"
    status = "enabled" if s.submit_enabled else "disabled"
    lines.append(f"  [{button}] ({status})")
    if s.phase == "editing":
        lines.append("  [Cancel] type 'cancel' to stop editing")
    return "\n".join(lines)


def _nth(app: ContactApp, arg: str) -> str | None:
    contacts = app.visible()
    try:
        index = int(arg)
    except ValueError:
        return None
    if not 1 <= index <= len(contacts):
        return None
    return contacts[index - 1]["id"]


def handle(app: ContactApp, line: str, out: Callable[[str], None] = print) -> bool:
    """Apply one command line; returns False when the user quits."""
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        out(f"could not parse input: {exc}")
        return True
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]
    if command in ("quit", "exit"):
        return False
    try:
        _dispatch(app, command, args, out)
    except ApiError as exc:
        out(f"could not reach the contacts service: {exc}")
    return True


def _dispatch(app: ContactApp, command: str, args: list[str], out: Callable[[str], None]) -> None:
    if command in FORM_FIELDS:
        app.change(command, " ".join(args))
    elif command == "submit":
        if not app.submit() and not app.state.submit_enabled:
            out("form is incomplete")
    elif command in ("edit", "delete"):
        contact_id = _nth(app, args[0]) if args else None
        if contact_id is None:
            out(f"usage: {command} <number from the list>")
        elif command == "edit":
            app.start_edit(contact_id)
        else:
            app.delete(contact_id)
    elif command == "cancel":
        app.cancel_edit()
    elif command == "search":
        app.search(" ".join(args))
    elif command == "clear":
        app.clear_search()
    elif command == "refresh":
        app.refresh()
    else:
        out(HELP)


def _confirm(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contacts-client",
        description="Create, edit and delete contacts from the terminal.",
    )
    parser.add_argument(
        "--api-url",
        default=CONTACTS_API_URL,
        help="Base URL of the contacts collection.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log failed requests to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.ERROR)

    app = ContactApp(
        ContactsClient(args.api_url),
        confirm=_confirm,
        alert=lambda text: print(f"!! {text}"),
    )
    handle(app, "refresh")
    print(HELP)
    while True:
        print()
        print(render_form(app))
        print()
        print(render_list(app))
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if not handle(app, line):
            return 0


if __name__ == "__main__":
    raise SystemExit(main())
