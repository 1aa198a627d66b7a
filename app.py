"""
Greenhouse plugin server entry point.

Run with: uvicorn app:app --port 8080
"""
import os

from greenhouse_plugin import PluginOptions, create_app
from greenhouse_plugin.config import (
    GREENHOUSE_DISABLED,
    GREENHOUSE_DISABLE_DASHBOARD,
    GREENHOUSE_STRICT_SYNC,
    GREENHOUSE_SYNC_ON_INIT,
)

app = create_app(
    PluginOptions(
        disabled=GREENHOUSE_DISABLED,
        disable_dashboard=GREENHOUSE_DISABLE_DASHBOARD,
        strict_sync=GREENHOUSE_STRICT_SYNC,
        sync_on_init=GREENHOUSE_SYNC_ON_INIT,
    )
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", 8080)))
