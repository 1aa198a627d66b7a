"""
Plugin options and resolved settings models.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BoardType(str, Enum):
    ACCORDION = "accordion"
    CYCLE = "cycle"


class FormType(str, Enum):
    IFRAME = "iframe"
    INLINE = "inline"


class CycleFx(str, Enum):
    FADE = "fade"
    FADEOUT = "fadeout"
    NONE = "none"
    SCROLL_HORZ = "scrollHorz"


class Labels(BaseModel):
    """Text labels used by the job board."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    apply_now: str = "Apply Now"
    apply_now_cancel: str = "Cancel"
    back: str = "Back"
    department: str = "Department: "
    description: str = ""
    hide_full_desc: str = "Hide Full Description"
    location: str = "Location: "
    office: str = "Office: "
    read_full_desc: str = "Read Full Description"


class GreenhouseSettings(BaseModel):
    """
    Settings after resolution across plugin options, environment and the
    persisted settings document.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url_token: str = ""
    api_key: str = ""
    cache_expiry_time: int = Field(3600, ge=0, description="Seconds; 0 disables caching")
    board_type: BoardType = BoardType.ACCORDION
    form_type: FormType = FormType.IFRAME
    cycle_fx: CycleFx = CycleFx.FADE
    debug: bool = False
    labels: Labels = Field(default_factory=Labels)
    custom_css: str = Field("", alias="customCSS")


class PluginOptions(BaseModel):
    """
    Options passed explicitly when the plugin is created.

    Built once at startup and never mutated; handlers receive it through
    dependency injection.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    url_token: Optional[str] = None
    api_key: Optional[str] = None
    cache_expiry_time: Optional[int] = Field(None, ge=0)
    board_type: Optional[BoardType] = None
    form_type: Optional[FormType] = None
    cycle_fx: Optional[CycleFx] = None
    debug: Optional[bool] = None
    labels: Optional[dict[str, str]] = None
    custom_css: Optional[str] = Field(None, alias="customCSS")

    # Keep collections and settings but skip endpoints and sync
    disabled: bool = False
    disable_dashboard: bool = False
    # Abort the whole sync when a single job detail fetch fails
    strict_sync: bool = False
    sync_on_init: bool = True
    request_timeout: Optional[float] = Field(None, gt=0)
    detail_concurrency: Optional[int] = Field(None, ge=1)
    dashboard_rows: Optional[int] = Field(None, ge=1)
