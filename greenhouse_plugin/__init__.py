"""
Greenhouse job board plugin.

Mirrors Greenhouse job postings into a document store and serves them
through a small FastAPI app.
"""
from greenhouse_plugin.models import PluginOptions
from greenhouse_plugin.plugin import create_app

__version__ = "0.1.0"

__all__ = ["PluginOptions", "create_app", "__version__"]
