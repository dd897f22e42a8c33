"""
Message formatters for the admin interface.
"""
from typing import Any, Dict, Sequence, Tuple

from mediaforward.ui.keyboards import KeyboardSpec, MenuKeyboard
from mediaforward.ui.messages import MessageTemplates


class MenuFormatter:
    """Formats replies and menu structures from templates."""

    def __init__(self, templates: MessageTemplates):
        self.templates = templates

    def format_menu(self, forwarding_enabled: bool) -> Tuple[str, KeyboardSpec]:
        """Caption and keyboard of the /menu message."""
        keyboard = MenuKeyboard.create(self.templates, forwarding_enabled)
        return self.templates.menu_caption, keyboard

    def format_sources_list(self, sources: Sequence[str]) -> str:
        """1-indexed listing, one source per line, under a header."""
        if not sources:
            return self.templates.no_sources

        lines = [
            self.templates.render("sources_item", index=index, source_id=source_id)
            for index, source_id in enumerate(sources, start=1)
        ]
        return self.templates.sources_header + "\n" + "\n".join(lines)

    def format_forwarding_state(self, enabled: bool) -> str:
        return self.templates.forward_started if enabled else self.templates.forward_stopped

    def format_status(self, forwarding_enabled: bool, source_count: int,
                      destination: str, stats: Dict[str, Any]) -> str:
        return self.templates.render(
            "status",
            state=self.templates.status_on if forwarding_enabled else self.templates.status_off,
            sources=source_count,
            destination=destination,
            forwarded=stats.get("forwarded", 0),
            failed=stats.get("failed", 0),
            ignored=stats.get("ignored", 0),
            last_error=self._format_last_error(stats),
            started_at=stats.get("started_at") or "-"
        )

    def _format_last_error(self, stats: Dict[str, Any]) -> str:
        if not stats.get("last_error"):
            return self.templates.status_no_error
        if stats.get("last_error_at"):
            return f"{stats['last_error']} ({stats['last_error_at']})"
        return stats["last_error"]
