"""
Greenhouse plugin models.

This module re-exports all model classes for convenient importing.
"""

# Greenhouse API shapes
from .greenhouse import (
    GreenhouseLocation,
    GreenhouseRef,
    GreenhouseJobSummary,
    GreenhouseDepartment,
    GreenhouseOffice,
    GreenhouseOfficeList,
    GreenhouseJobDetail,
    ApplicationResult,
)

# Cached documents
from .job import JobDocument

# Options and settings
from .settings import (
    BoardType,
    FormType,
    CycleFx,
    Labels,
    GreenhouseSettings,
    PluginOptions,
)

# Endpoint payloads
from .api import (
    ApplyRequest,
    AddJobRequest,
    ClearCacheResponse,
    DebugJobSummary,
    DebugResponse,
    DashboardStats,
    PublicSettingsResponse,
)

__all__ = [
    "GreenhouseLocation",
    "GreenhouseRef",
    "GreenhouseJobSummary",
    "GreenhouseDepartment",
    "GreenhouseOffice",
    "GreenhouseOfficeList",
    "GreenhouseJobDetail",
    "ApplicationResult",
    "JobDocument",
    "BoardType",
    "FormType",
    "CycleFx",
    "Labels",
    "GreenhouseSettings",
    "PluginOptions",
    "ApplyRequest",
    "AddJobRequest",
    "ClearCacheResponse",
    "DebugJobSummary",
    "DebugResponse",
    "DashboardStats",
    "PublicSettingsResponse",
]
