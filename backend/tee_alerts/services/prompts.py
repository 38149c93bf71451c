"""
Natural-language instructions for the search and email agents.

Dates go out in both machine (2025-07-15) and human (Tuesday, July 15, 2025) form: the search
agent matches fuzzily and finds more listings when given both.
"""
from datetime import date, time

from tee_alerts.core.constants import EMAIL_DIGEST_EXTRA_MATCHES
from tee_alerts.schemas import Alert, Match


def format_time_display(t: time) -> str:
    """07:00 -> 7:00 AM, 13:30 -> 1:30 PM, 00:15 -> 12:15 AM."""
    hour = t.hour % 12 or 12
    ampm = "PM" if t.hour >= 12 else "AM"
    return f"{hour}:{t.minute:02d} {ampm}"


def format_date_for_search(d: date) -> str:
    """2025-07-15 -> Tuesday, July 15, 2025."""
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def raw_dates(alert: Alert) -> str:
    return ", ".join(d.isoformat() for d in alert.dates)


def human_dates(alert: Alert) -> str:
    return ", ".join(format_date_for_search(d) for d in alert.dates)


def build_search_prompt(alert: Alert) -> str:
    dates_str = human_dates(alert)
    raw = raw_dates(alert)
    window = f"{format_time_display(alert.time_window_start)} to {format_time_display(alert.time_window_end)}"
    return f"""Search the web RIGHT NOW for available tee times. This is a real search request.

SEARCH FOR: "{alert.course_name}" tee times on GolfNow.com
DATES TO CHECK: {dates_str} ({raw})
PREFERRED TIME WINDOW: {window}
NUMBER OF PLAYERS: {alert.players}

INSTRUCTIONS:
1. Search GolfNow.com for "{alert.course_name}" tee times on {dates_str}
2. Also search for "{alert.course_name} tee times {raw}"
3. List EVERY available tee time you find with the exact time, price, and booking URL
4. Set matches_found to true if you find ANY tee times at all
5. Include ALL tee times, not just those in the preferred window
6. Use real GolfNow booking URLs
7. If price is visible, include it. Otherwise use "See GolfNow"

Return the results as JSON with the matching_tee_times array populated."""


def email_subject(alert: Alert, first: Match | None) -> str:
    when = (first.date if first and first.date else "") or raw_dates(alert)
    return f"Tee Time Available - {alert.course_name} on {when}"


def build_email_prompt(alert: Alert, matches: list[Match]) -> str:
    """First match in full, the next few as a one-line digest."""
    first = matches[0] if matches else None
    when = (first.date if first and first.date else "") or raw_dates(alert)
    extra = matches[1 : 1 + EMAIL_DIGEST_EXTRA_MATCHES]
    extra_str = ", ".join(f"{m.time} ({m.price})" for m in extra) or "None"
    return f"""Send a tee time alert email with the following details:
Recipient Email: {alert.notify_email}
Email Subject: {email_subject(alert, first)}
Course Name: {alert.course_name}
Tee Time Date: {when}
Tee Time Slot: {(first.time if first and first.time else "") or "Available"}
Available Spots: {first.available_spots if first else alert.players}
Price: {first.price if first else "See booking site"}
Booking Link: {(first.booking_link if first and first.booking_link else "") or "https://www.golfnow.com"}

Additional tee times found: {extra_str}

Please compose a professional email with all these details and a prominent booking link."""
