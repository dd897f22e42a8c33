"""
Reply templates shown to the admin.
Defaults are in French; any subset can be overridden from a JSON file.
"""
import json
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import BaseModel, ValidationError

logger = structlog.get_logger(__name__)


class MessageTemplates(BaseModel):
    """All user-visible strings. Placeholders use ``str.format`` syntax."""

    model_config = {"extra": "ignore", "frozen": True}

    # Menu
    menu_caption: str = "Menu de gestion du userbot:"
    button_add_source: str = "Ajouter source"
    button_remove_source: str = "Supprimer source"
    button_list_sources: str = "Lister sources"
    button_start_forward: str = "Démarrer forward"
    button_stop_forward: str = "Stopper forward"

    # Source management
    usage_addsource: str = "Usage: /addsource <chat_id>"
    usage_removesource: str = "Usage: /removesource <chat_id>"
    source_added: str = "Source {source_id} ajoutée avec succès"
    source_exists: str = "Cette source est déjà dans la liste"
    source_removed: str = "Source {source_id} supprimée avec succès"
    source_not_found: str = "Cette source n'est pas dans la liste"
    sources_header: str = "Sources configurées:"
    sources_item: str = "{index}. {source_id}"
    no_sources: str = "Aucune source configurée"

    # Forwarding switch
    forward_started: str = "Forwarding started"
    forward_stopped: str = "Forwarding stopped"

    # Button hints
    hint_addsource: str = "Utilisez /addsource <chat_id>"
    hint_removesource: str = "Utilisez /removesource <chat_id>"
    unauthorized: str = "Unauthorized"

    # Status
    status: str = (
        "Statut du userbot:\n"
        "Forward: {state}\n"
        "Sources: {sources}\n"
        "Destination: {destination}\n"
        "Transférés: {forwarded}\n"
        "Échecs: {failed}\n"
        "Ignorés: {ignored}\n"
        "Dernière erreur: {last_error}\n"
        "Démarré: {started_at}"
    )
    status_on: str = "actif"
    status_off: str = "arrêté"
    status_no_error: str = "aucune"

    def render(self, name: str, **kwargs) -> str:
        """Format a template, falling back to the raw text on bad placeholders."""
        template = getattr(self, name)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.warning("Bad placeholder in message template", template=name, error=str(e))
            return template

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "MessageTemplates":
        """Build templates, applying overrides from ``path`` when given.

        A missing or invalid override file is logged and the defaults are used.
        """
        if path is None:
            return cls()

        try:
            with Path(path).open("r", encoding="utf-8") as f:
                overrides = json.load(f)
            if not isinstance(overrides, dict):
                raise ValueError("messages file must contain a JSON object")
            templates = cls(**overrides)
            logger.info("Message templates loaded", path=str(path), overridden=sorted(overrides))
            return templates
        except (OSError, ValueError, ValidationError) as e:
            logger.error("Could not load message templates, using defaults",
                         path=str(path), error=str(e))
            return cls()
