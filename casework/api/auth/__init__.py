"""Request authentication for Casework routes."""

from casework.api.auth.actor import CurrentActor, Locale, get_current_actor, get_locale

__all__: list[str] = ["CurrentActor", "Locale", "get_current_actor", "get_locale"]
