from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .models import CalendarEvent, OperationResult, SyncReport

SCOPES = [
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/calendar.events",
]
DELETE_INTERVAL_SECONDS = 0.5
SEASON_START = "{year}-09-01T00:00:00Z"


def _load_credentials(client_secrets_file: str, token_file: str) -> Credentials:
    creds = None
    if token_file:
        try:
            creds = Credentials.from_authorized_user_file(token_file, SCOPES)
        except (OSError, ValueError):
            creds = None
    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except GoogleAuthError as exc:
                logging.warning("Token refresh failed (%s); starting a new login", exc)
                creds = None
        if not creds or not creds.valid:
            flow = InstalledAppFlow.from_client_secrets_file(client_secrets_file, SCOPES)
            creds = flow.run_local_server(port=0)
        with open(token_file, "w") as token:
            token.write(creds.to_json())
    return creds


def build_service(client_secrets_file: str, token_file: str):
    creds = _load_credentials(client_secrets_file, token_file)
    return build("calendar", "v3", credentials=creds)


def run_paced(
    items: Iterable[Any],
    operation: Callable[[Any], Any],
    interval: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> List[OperationResult]:
    """Apply ``operation`` to each item in order, one at a time.

    A calendar API error marks that item failed and the loop moves on. When
    ``interval`` is set, waits that many seconds between consecutive operations.
    """
    results: List[OperationResult] = []
    items = list(items)
    for index, item in enumerate(items):
        try:
            operation(item)
        except HttpError as exc:
            logging.error("Calendar request failed for %s: %s", item, exc)
            results.append(OperationResult(item=item, ok=False, error=str(exc)))
        else:
            results.append(OperationResult(item=item, ok=True))
        if interval and index < len(items) - 1:
            sleep(interval)
    return results


def insert_events(service, calendar_id: str, events: List[CalendarEvent]) -> SyncReport:
    """Insert every event; nothing already on the calendar is checked, so reruns duplicate."""

    def insert(event: CalendarEvent) -> None:
        logging.info("Inserting: %s %s", event.summary, event.date)
        service.events().insert(calendarId=calendar_id, body=event.to_gcal_body()).execute()

    return SyncReport(action="Inserted", results=run_paced(events, insert))


def list_events_since(service, calendar_id: str, time_min: str) -> List[dict]:
    logging.info("Fetching events on %s from %s", calendar_id, time_min)
    events: List[dict] = []
    page_token = None
    while True:
        events_result = (
            service.events()
            .list(
                calendarId=calendar_id,
                timeMin=time_min,
                singleEvents=True,
                orderBy="startTime",
                pageToken=page_token,
            )
            .execute()
        )
        events.extend(events_result.get("items", []))
        page_token = events_result.get("nextPageToken")
        if not page_token:
            break
    logging.info("Found %d events", len(events))
    return events


def clear_events(
    service,
    calendar_id: str,
    year: int,
    interval: float = DELETE_INTERVAL_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> SyncReport:
    existing = list_events_since(service, calendar_id, SEASON_START.format(year=year))
    if not existing:
        logging.info("No events to delete")
        return SyncReport(action="Deleted")

    def delete(event: dict) -> None:
        start = event.get("start", {})
        logging.info("DELETE %s %s", event.get("summary", ""), start.get("date") or start.get("dateTime"))
        service.events().delete(calendarId=calendar_id, eventId=event["id"]).execute()

    return SyncReport(action="Deleted", results=run_paced(existing, delete, interval=interval, sleep=sleep))
