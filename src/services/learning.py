"""
Learning loop: resolve UNMAPPED entries and grow the reference table.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable

from core.normalize import normalize
from models.entries import MatchedEntry
from services.reference_table import ReferenceTable

# description -> task code, or None/"" to skip; may be sync or async
Resolver = Callable[[str], "str | None | Awaitable[str | None]"]


async def _ask(resolver: Resolver, description: str) -> str | None:
    answer = resolver(description)
    if inspect.isawaitable(answer):
        answer = await answer
    return (answer or "").strip() or None


async def resolve_unmapped(
    entries: list[MatchedEntry],
    table: ReferenceTable,
    resolver: Resolver,
) -> list[MatchedEntry]:
    """
    Ask the resolver for a task code for each UNMAPPED entry.

    A non-empty answer is appended to the reference table and written into
    the entry (confidence 1.0). Entries sharing a normalized description are
    asked about once; the first answer (or skip) applies to all of them and
    only one record is appended. Entries mapped earlier in the batch are not
    re-matched against mappings learned here.

    Returns:
        The entries that were resolved, in input order.
    """
    answers: dict[str, str | None] = {}
    resolved = []

    for entry in entries:
        if not entry.is_unmapped:
            continue

        key = normalize(entry.description)
        if key not in answers:
            task_code = await _ask(resolver, entry.description)
            answers[key] = task_code
            if task_code:
                table.append(entry.description, task_code)

        task_code = answers[key]
        if task_code:
            entry.task_code = task_code
            entry.confidence = 1.0
            resolved.append(entry)

    return resolved


def skip_resolver(description: str) -> None:
    """Resolver for unattended contexts: leaves every entry UNMAPPED."""
    return None


async def console_resolver(description: str) -> str | None:
    """Prompt on stdin for a task code without blocking the event loop."""
    prompt = (
        f"\nNo mapping for:\n  \"{description}\"\n"
        "Enter ERP subtask ID (or blank to skip): "
    )
    answer = (await asyncio.to_thread(input, prompt)).strip()
    if answer:
        print("✓ Saved.")
    return answer or None
