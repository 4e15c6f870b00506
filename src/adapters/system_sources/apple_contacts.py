"""Apple Contacts via osascript (macOS only).

Two script styles are used:
- JXA (JavaScript for Automation) for ``list``/``search``: it fetches one
  property for *every* person in a single Apple Event
  (``app.people.name()``), so a large address book costs four calls.
- AppleScript for everything else: it walks records one Apple Event at a
  time, which is slow, but exposes labels, addresses and ``make new``.

Scripts print flat delimiter-separated text (see ``adapters.text_parser``).
Application-level failures come back on stdout as ``ERROR: <message>``.
"""

from __future__ import annotations

import logging
import sys
from string import Template

from adapters.process_runner import invoke, run_osascript
from adapters.text_parser import (
    ADDRESS_SEP,
    FIELD_SEP,
    ITEM_SEP,
    LABEL_SEP,
    RECORD_SEP,
    clean_label,
    normalize_null,
    parse_labeled_values,
    split_records,
    split_total,
)
from core.config import AppSettings
from core.domain.contacts import Address, Contact, ContactSummary, Group, NewContact
from core.domain.invocation import ScriptLanguage
from core.errors import (
    NotFoundError,
    OutputParseError,
    PlatformUnsupportedError,
    ProcessLaunchError,
    ScriptError,
)
from core.interfaces.runner import CommandRunner

LOGGER = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100
DEFAULT_SEARCH_LIMIT = 50

_ERROR_PREFIX = "ERROR:"
_CONTACT_FIELDS = 10
_SUMMARY_FIELDS = 4
_ADDRESS_FIELDS = 5

_LIST_SCRIPT = Template("""
var app = Application('Contacts');
var maxResults = $max_results;

var names = app.people.name();
var orgs = app.people.organization();
var allEmails = app.people.emails.value();
var allPhones = app.people.phones.value();
var total = names.length;
var count = Math.min(total, maxResults);

var results = [];
for (var i = 0; i < count; i++) {
    var name = names[i] || '';
    var company = (orgs[i] && typeof orgs[i] === 'string') ? orgs[i] : '';
    var email = (allEmails[i] && allEmails[i].length > 0) ? allEmails[i][0] : '';
    var phone = (allPhones[i] && allPhones[i].length > 0) ? allPhones[i][0] : '';
    results.push(name + '|||' + email + '|||' + phone + '|||' + company);
}
total + '~~~' + results.join(':::');
""")

_SEARCH_SCRIPT = Template("""
var app = Application('Contacts');
var query = '$query'.toLowerCase();
var maxResults = $max_results;

var names = app.people.name();
var orgs = app.people.organization();
var allEmails = app.people.emails.value();
var allPhones = app.people.phones.value();

var matchIndices = [];
for (var i = 0; i < names.length && matchIndices.length < maxResults; i++) {
    var n = (names[i] || '').toLowerCase();
    var o = (orgs[i] && typeof orgs[i] === 'string') ? orgs[i].toLowerCase() : '';

    if (n.indexOf(query) >= 0 || o.indexOf(query) >= 0) {
        matchIndices.push(i);
        continue;
    }

    var found = false;
    var emails = allEmails[i] || [];
    for (var e = 0; e < emails.length; e++) {
        if (emails[e] && emails[e].toLowerCase().indexOf(query) >= 0) {
            found = true; break;
        }
    }

    if (!found) {
        var phones = allPhones[i] || [];
        for (var ph = 0; ph < phones.length; ph++) {
            if (phones[ph] && phones[ph].indexOf(query) >= 0) {
                found = true; break;
            }
        }
    }

    if (found) {
        matchIndices.push(i);
    }
}

var results = [];
for (var j = 0; j < matchIndices.length; j++) {
    var idx = matchIndices[j];
    var name = names[idx] || '';
    var company = (orgs[idx] && typeof orgs[idx] === 'string') ? orgs[idx] : '';
    var email = (allEmails[idx] && allEmails[idx].length > 0) ? allEmails[idx][0] : '';
    var phone = (allPhones[idx] && allPhones[idx].length > 0) ? allPhones[idx][0] : '';
    results.push(name + '|||' + email + '|||' + phone + '|||' + company);
}
results.join(':::');
""")

_GET_SCRIPT = Template("""
tell application "Contacts"
	try
		set p to first person whose name is "$name"

		set fullName to name of p
		set firstName to ""
		set lastName to ""
		set companyName to ""
		set jobTitle to ""
		set notesText to ""
		set birthdayText to ""

		try
			set firstName to first name of p
		end try
		try
			set lastName to last name of p
		end try
		try
			set companyName to organization of p
		end try
		try
			set jobTitle to job title of p
		end try
		try
			set notesText to note of p
		end try
		try
			set birthdayText to birth date of p as string
		end try

		set emailList to ""
		repeat with e in emails of p
			set emailList to emailList & (label of e) & "=" & (value of e) & ";;;"
		end repeat

		set phoneList to ""
		repeat with ph in phones of p
			set phoneList to phoneList & (label of ph) & "=" & (value of ph) & ";;;"
		end repeat

		set addressList to ""
		repeat with addr in addresses of p
			set addrLabel to label of addr
			set addrStreet to ""
			set addrCity to ""
			set addrState to ""
			set addrZip to ""
			set addrCountry to ""
			try
				set addrStreet to street of addr
			end try
			try
				set addrCity to city of addr
			end try
			try
				set addrState to state of addr
			end try
			try
				set addrZip to zip of addr
			end try
			try
				set addrCountry to country of addr
			end try
			set addressList to addressList & addrLabel & "=" & addrStreet & "|" & addrCity & "|" & addrState & "|" & addrZip & "|" & addrCountry & ";;;"
		end repeat

		return fullName & "|||" & firstName & "|||" & lastName & "|||" & companyName & "|||" & jobTitle & "|||" & notesText & "|||" & birthdayText & "|||" & emailList & "|||" & phoneList & "|||" & addressList
	on error errMsg
		return "ERROR: " & errMsg
	end try
end tell
""")

_GROUPS_SCRIPT = """
tell application "Contacts"
	set groupList to {}
	repeat with g in groups
		set end of groupList to (name of g) & "|||" & (count of people of g)
	end repeat
	set AppleScript's text item delimiters to ":::"
	return groupList as text
end tell
"""

_GROUP_SCRIPT = Template("""
tell application "Contacts"
	try
		set g to group "$name"
		set contactList to {}
		repeat with p in people of g
			set fullName to name of p
			set primaryEmail to ""
			set primaryPhone to ""
			set companyName to ""
			try
				set primaryEmail to value of first email of p
			end try
			try
				set primaryPhone to value of first phone of p
			end try
			try
				set companyName to organization of p
			end try
			set end of contactList to fullName & "|||" & primaryEmail & "|||" & primaryPhone & "|||" & companyName
		end repeat
		set AppleScript's text item delimiters to ":::"
		return contactList as text
	on error errMsg
		return "ERROR: " & errMsg
	end try
end tell
""")

_CREATE_SCRIPT = Template("""
tell application "Contacts"
	try
		set newPerson to make new person with properties $properties
$extras		save
		return name of newPerson
	on error errMsg
		return "ERROR: " & errMsg
	end try
end tell
""")


def escape_applescript(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def escape_js_string(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def parse_summaries(text: str, *, limit: int = 0) -> list[ContactSummary]:
    """Parse ``name|||email|||phone|||company`` records.

    ``limit`` > 0 stops after that many well-formed records.
    """

    contacts: list[ContactSummary] = []
    for fields in split_records(text, RECORD_SEP, FIELD_SEP, min_fields=_SUMMARY_FIELDS):
        if limit > 0 and len(contacts) >= limit:
            break
        contacts.append(
            ContactSummary(
                name=fields[0],
                email=normalize_null(fields[1]),
                phone=normalize_null(fields[2]),
                company=normalize_null(fields[3]),
            )
        )
    return contacts


def parse_groups(text: str) -> list[Group]:
    groups: list[Group] = []
    for fields in split_records(text, RECORD_SEP, FIELD_SEP, min_fields=2):
        try:
            count = int(fields[1])
        except ValueError:
            count = 0
        groups.append(Group(name=fields[0], count=count))
    return groups


def parse_addresses(text: str) -> list[Address]:
    addresses: list[Address] = []
    for item in text.split(ITEM_SEP):
        item = item.strip()
        if not item:
            continue
        label, sep, rest = item.partition(LABEL_SEP)
        if not sep:
            continue
        parts = rest.split(ADDRESS_SEP)
        if len(parts) < _ADDRESS_FIELDS:
            continue
        addresses.append(
            Address(
                label=clean_label(label),
                street=parts[0],
                city=parts[1],
                state=parts[2],
                zip=parts[3],
                country=parts[4],
            )
        )
    return addresses


def parse_contact(text: str) -> Contact:
    fields = text.split(FIELD_SEP)
    if len(fields) < _CONTACT_FIELDS:
        raise OutputParseError(
            "Failed to parse contact data",
            details={"fields": len(fields), "expected": _CONTACT_FIELDS},
        )
    fields = [part.strip() for part in fields]
    return Contact(
        name=fields[0],
        first_name=fields[1],
        last_name=fields[2],
        company=fields[3],
        job_title=fields[4],
        notes=fields[5],
        birthday=fields[6],
        emails=parse_labeled_values(fields[7]),
        phones=parse_labeled_values(fields[8]),
        addresses=parse_addresses(fields[9]),
    )


def build_create_script(contact: NewContact) -> str:
    first_name, _, last_name = contact.name.partition(" ")

    props = [f'first name:"{escape_applescript(first_name)}"']
    if last_name:
        props.append(f'last name:"{escape_applescript(last_name)}"')
    if contact.company:
        props.append(f'organization:"{escape_applescript(contact.company)}"')
    if contact.note:
        props.append(f'note:"{escape_applescript(contact.note)}"')

    extras = ""
    if contact.email:
        extras += (
            "\t\tmake new email at end of emails of newPerson with properties "
            f'{{label:"work", value:"{escape_applescript(contact.email)}"}}\n'
        )
    if contact.phone:
        extras += (
            "\t\tmake new phone at end of phones of newPerson with properties "
            f'{{label:"mobile", value:"{escape_applescript(contact.phone)}"}}\n'
        )

    return _CREATE_SCRIPT.substitute(properties="{" + ", ".join(props) + "}", extras=extras)


def _script_error_message(output: str) -> str | None:
    if not output.startswith(_ERROR_PREFIX):
        return None
    return output[len(_ERROR_PREFIX):].strip()


class AppleContacts:
    """Apple Contacts source."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        runner: CommandRunner = invoke,
        platform: str | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._runner = runner
        self._platform = platform or sys.platform

    def ensure_supported(self) -> None:
        if self._platform != "darwin":
            raise PlatformUnsupportedError(
                "Apple Contacts is only available on macOS",
                details={"current_platform": self._platform, "required": "darwin (macOS)"},
            )

    def _run(self, script: str, language: ScriptLanguage, failure_kind: str) -> str:
        self.ensure_supported()
        try:
            return run_osascript(
                script,
                language,
                timeout=self._settings.script_timeout_seconds,
                runner=self._runner,
            )
        except (ScriptError, ProcessLaunchError) as exc:
            # Timeouts keep their own kind.
            exc.kind = failure_kind
            raise

    def list_contacts(self, limit: int = 0) -> tuple[list[ContactSummary], int]:
        """Return up to ``limit`` summaries (100 when ``limit`` <= 0) and the book total."""

        max_results = limit if limit > 0 else DEFAULT_LIST_LIMIT
        output = self._run(
            _LIST_SCRIPT.substitute(max_results=max_results),
            ScriptLanguage.JAVASCRIPT,
            "list_failed",
        )
        if not output:
            return [], 0
        total, body = split_total(output)
        return parse_summaries(body), total

    def search(self, query: str, limit: int = 0) -> list[ContactSummary]:
        max_results = limit if limit > 0 else DEFAULT_SEARCH_LIMIT
        script = _SEARCH_SCRIPT.substitute(query=escape_js_string(query), max_results=max_results)
        output = self._run(script, ScriptLanguage.JAVASCRIPT, "search_failed")
        return parse_summaries(output)

    def get(self, name: str) -> Contact:
        output = self._run(
            _GET_SCRIPT.substitute(name=escape_applescript(name)),
            ScriptLanguage.APPLESCRIPT,
            "get_failed",
        )
        message = _script_error_message(output)
        if message is not None:
            # Substring match on Contacts' English error text.
            if "Can't get person" in message:
                raise NotFoundError(
                    f"Contact not found: {name}",
                    kind="contact_not_found",
                    details={"name": name},
                )
            raise ScriptError(message, kind="get_failed")
        return parse_contact(output)

    def groups(self) -> list[Group]:
        output = self._run(_GROUPS_SCRIPT, ScriptLanguage.APPLESCRIPT, "groups_failed")
        return parse_groups(output)

    def group(self, name: str, limit: int = 0) -> list[ContactSummary]:
        output = self._run(
            _GROUP_SCRIPT.substitute(name=escape_applescript(name)),
            ScriptLanguage.APPLESCRIPT,
            "group_failed",
        )
        message = _script_error_message(output)
        if message is not None:
            if "Can't get group" in message:
                raise NotFoundError(
                    f"Group not found: {name}",
                    kind="group_not_found",
                    details={"name": name},
                )
            raise ScriptError(message, kind="group_failed")
        return parse_summaries(output, limit=limit)

    def create(self, contact: NewContact) -> str:
        """Create ``contact`` and return the name Contacts stored it under."""

        LOGGER.debug("contacts_create has_email=%s has_phone=%s", bool(contact.email), bool(contact.phone))
        output = self._run(build_create_script(contact), ScriptLanguage.APPLESCRIPT, "create_failed")
        message = _script_error_message(output)
        if message is not None:
            raise ScriptError(message, kind="create_failed")
        return output
