"""
Settings service - resolves plugin settings from their three sources.

Per field, the first non-empty value wins in this order:
explicit plugin option, environment variable, persisted settings document.
Model defaults fill whatever is left.
"""
import logging
from typing import Any, Optional

from pydantic.alias_generators import to_camel

from greenhouse_plugin.models import GreenhouseSettings, Labels, PluginOptions, PublicSettingsResponse
from greenhouse_plugin.repositories import SettingsRepository

logger = logging.getLogger(__name__)

# Settings keys taking part in resolution
RESOLVABLE_FIELDS = (
    "urlToken", "apiKey", "cacheExpiryTime", "boardType",
    "formType", "cycleFx", "debug", "customCSS",
)
LABEL_FIELDS = tuple(to_camel(name) for name in Labels.model_fields)

SETTINGS_DOCUMENT_NAME = "Greenhouse Settings"


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def resolve_settings(*sources: Optional[dict]) -> GreenhouseSettings:
    """Merge settings sources, highest priority first."""
    sources = [source or {} for source in sources]
    resolved: dict[str, Any] = {}

    for key in RESOLVABLE_FIELDS:
        for source in sources:
            if _is_set(source.get(key)):
                resolved[key] = source[key]
                break

    labels: dict[str, Any] = {}
    for key in LABEL_FIELDS:
        for source in sources:
            value = (source.get("labels") or {}).get(key)
            if _is_set(value):
                labels[key] = value
                break
    resolved["labels"] = labels

    return GreenhouseSettings(**resolved)


class SettingsService:
    """Service for reading and initializing plugin settings."""

    def __init__(self, repo: SettingsRepository, options: PluginOptions, environment: dict):
        self.repo = repo
        self.options = options
        self.environment = environment

    def _option_values(self) -> dict:
        return self.options.model_dump(by_alias=True, exclude_none=True, mode="json")

    async def resolve(self) -> GreenhouseSettings:
        document = await self.repo.get()
        return resolve_settings(self._option_values(), self.environment, document)

    async def ensure_settings_document(self) -> Optional[dict]:
        """
        Write the settings document once, seeded from options, environment and
        defaults. Returns the created document, or None when one already exists.
        """
        if await self.repo.get() is not None:
            return None

        settings = resolve_settings(self._option_values(), self.environment)
        document = await self.repo.create({
            "name": SETTINGS_DOCUMENT_NAME,
            **settings.model_dump(by_alias=True, mode="json"),
        })
        logger.info("Initialized Greenhouse settings document")
        return document

    async def public_settings(self) -> PublicSettingsResponse:
        settings = await self.resolve()
        return PublicSettingsResponse(
            url_token=settings.url_token,
            board_type=settings.board_type.value,
            form_type=settings.form_type.value,
            cycle_fx=settings.cycle_fx.value,
            cache_expiry_time=settings.cache_expiry_time,
            labels=settings.labels.model_dump(by_alias=True),
            custom_css=settings.custom_css,
            api_key_configured=bool(settings.api_key),
        )
