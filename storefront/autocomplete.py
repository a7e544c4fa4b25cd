"""Autocomplete controller for the search box.

An event-loop driven state machine behind the search input: it debounces
keystrokes, fetches ranked suggestions, tracks the dropdown and keyboard
selection, and navigates on selection or submit. Rendering is left to the
caller, which reads the public attributes after each event.

States::

    idle -> typing -> fetching -> open | closed

Every keystroke advances a request sequence number and cancels both the
pending debounce timer and any in-flight fetch. A response is applied only
if its sequence number is still the latest, so a slow answer to an old
keystroke can never overwrite newer state.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple
from urllib.parse import quote

from storefront.config import DEBOUNCE_SECONDS, MIN_SUGGEST_QUERY_LENGTH
from storefront.highlight import split_highlight

__all__ = [
    "AutocompleteController",
    "product_path",
    "search_path",
]

logger = logging.getLogger(__name__)

Suggestion = Dict[str, Any]
SuggestionFetcher = Callable[[str], Awaitable[List[Suggestion]]]


def product_path(slug: str) -> str:
    """Detail page for a laptop."""
    return f"/laptops/{quote(slug, safe='')}"


def search_path(query: str) -> str:
    """Full search results page for an already-trimmed query."""
    return f"/search?q={quote(query, safe='')}"


class AutocompleteController:
    """Debounced, race-safe suggestion dropdown state.

    Args:
        fetch_suggestions: Coroutine function returning suggestion dicts
            (``id``, ``name``, ``slug``, ...) for a query.
        navigate: Called with a path when the user picks a result.
        on_search: Optional replacement for navigating on submit.
        debounce_seconds: Quiet period before a fetch is issued.
        min_query_length: Shortest trimmed query worth fetching.
    """

    def __init__(
        self,
        fetch_suggestions: SuggestionFetcher,
        navigate: Callable[[str], None],
        on_search: Optional[Callable[[str], None]] = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        min_query_length: int = MIN_SUGGEST_QUERY_LENGTH,
    ):
        self._fetch_suggestions = fetch_suggestions
        self._navigate = navigate
        self._on_search = on_search
        self.debounce_seconds = debounce_seconds
        self.min_query_length = min_query_length

        self.query = ""
        self.suggestions: List[Suggestion] = []
        self.is_open = False
        self.is_loading = False
        self.selected_index = -1

        self._timer: Optional[asyncio.TimerHandle] = None
        self._inflight: Optional["asyncio.Task[None]"] = None
        self._sequence = 0

    @property
    def state(self) -> str:
        if self.is_open:
            return "open"
        if self.is_loading:
            return "fetching"
        if self._timer is not None:
            return "typing"
        if self.query:
            return "closed"
        return "idle"

    @property
    def selected(self) -> Optional[Suggestion]:
        if 0 <= self.selected_index < len(self.suggestions):
            return self.suggestions[self.selected_index]
        return None

    # ---------- input ----------

    def on_input(self, value: str) -> None:
        """Handle a keystroke: restart the debounce timer for ``value``.

        Must be called from within a running event loop.
        """
        self.query = value
        self.selected_index = -1
        self._supersede()

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            self.debounce_seconds, self._on_debounce_elapsed, value, self._sequence
        )

    def _supersede(self) -> None:
        """Invalidate the pending timer and any in-flight fetch."""
        self._sequence += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None
        self.is_loading = False

    def _on_debounce_elapsed(self, value: str, sequence: int) -> None:
        self._timer = None
        if sequence != self._sequence:
            return

        if len(value.strip()) < self.min_query_length:
            self.suggestions = []
            self.is_open = False
            return

        self.is_loading = True
        self._inflight = asyncio.get_running_loop().create_task(self._fetch(value, sequence))

    async def _fetch(self, value: str, sequence: int) -> None:
        try:
            suggestions = await self._fetch_suggestions(value)
        except Exception:
            if sequence != self._sequence:
                return
            # Autocomplete is an enhancement: fail soft
            logger.warning(f"Error fetching suggestions for {value!r}", exc_info=True)
            self.is_loading = False
            self._inflight = None
            self.suggestions = []
            self.is_open = False
            return

        if sequence != self._sequence:
            logger.debug(f"Discarding stale suggestions for {value!r}")
            return

        self.is_loading = False
        self._inflight = None
        if not self.query.strip():
            return
        self.suggestions = list(suggestions or [])
        self.is_open = bool(self.suggestions)

    # ---------- keyboard & focus ----------

    def on_key(self, key: str) -> bool:
        """Handle a navigation key. Returns True if the key was consumed."""
        has_dropdown = self.is_open and bool(self.suggestions)

        if key == "Enter":
            selected = self.selected if has_dropdown else None
            if selected is not None:
                self.select(selected)
            else:
                self.submit()
            return True

        if not has_dropdown:
            return False

        if key == "ArrowDown":
            self.selected_index = min(self.selected_index + 1, len(self.suggestions) - 1)
        elif key == "ArrowUp":
            self.selected_index = max(self.selected_index - 1, -1)
        elif key == "Escape":
            self.is_open = False
            self.selected_index = -1
        else:
            return False
        return True

    def on_click_outside(self) -> None:
        """Focus left the control: close, keep the typed text."""
        self.is_open = False
        self.selected_index = -1

    def on_focus(self) -> None:
        if self.suggestions:
            self.is_open = True

    def on_hover(self, index: int) -> None:
        if 0 <= index < len(self.suggestions):
            self.selected_index = index

    # ---------- outcomes ----------

    def select(self, suggestion: Suggestion) -> None:
        """Go to a suggested laptop's detail page."""
        self._supersede()
        self.query = suggestion.get("name", self.query)
        self._reset_dropdown()
        self._navigate(product_path(suggestion["slug"]))

    def submit(self) -> bool:
        """Run a full search for the trimmed query. Returns False if empty."""
        trimmed = self.query.strip()
        if not trimmed:
            return False

        self._supersede()
        self._reset_dropdown()
        if self._on_search is not None:
            self._on_search(trimmed)
        else:
            self._navigate(search_path(trimmed))
        return True

    def clear(self) -> None:
        """Empty the search box."""
        self._supersede()
        self.query = ""
        self._reset_dropdown()

    def dispose(self) -> None:
        """Cancel pending work when the control goes away."""
        self._supersede()

    def highlight(self, text: str) -> List[Tuple[str, bool]]:
        """Split suggestion text around the current query."""
        return split_highlight(text, self.query)

    def _reset_dropdown(self) -> None:
        self.is_open = False
        self.suggestions = []
        self.selected_index = -1
