"""
Admin dashboard widget.
"""
import logging
from html import escape
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from greenhouse_plugin.dependencies import get_dashboard_service
from greenhouse_plugin.exceptions import GreenhousePluginException
from greenhouse_plugin.services import DashboardService, DashboardView

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/greenhouse", tags=["Greenhouse Dashboard"])


def render_dashboard(view: DashboardView, refresh_action: str) -> str:
    """HTML for the widget: config alert, counts, recent jobs table and a refresh form."""
    alert = ""
    if view.warnings:
        alert = f"""
        <div class="greenhouse-dashboard__alert">
          <h3>Configuration Required</h3>
          <p>Please configure your Greenhouse settings to enable full functionality. {escape(" ".join(view.warnings))}</p>
        </div>"""

    error = f'<p class="greenhouse-dashboard__error">{escape(view.error)}</p>' if view.error else ""

    cards = "".join(
        f'<div class="greenhouse-dashboard__stat"><h3>{label}</h3><p>{value}</p></div>'
        for label, value in (
            ("Total Jobs", view.stats.total_jobs),
            ("Departments", view.stats.departments),
            ("Locations", view.stats.locations),
            ("Offices", view.stats.offices),
        )
    )

    if view.recent:
        rows = "\n".join(
            "<tr><td>{title}</td><td>{department}</td><td>{office}</td><td>{location}</td><td>{updated}</td></tr>".format(
                title=escape(str(job.get("title") or "")),
                department=escape(str(job.get("department") or "")),
                office=escape(str(job.get("office") or "")),
                location=escape(str(job.get("location") or "")),
                updated=escape(str(job.get("updatedAt") or "")),
            )
            for job in view.recent
        )
        table = f"""
        <table class="greenhouse-dashboard__jobs">
          <thead><tr><th>Title</th><th>Department</th><th>Office</th><th>Location</th><th>Updated</th></tr></thead>
          <tbody>
{rows}
          </tbody>
        </table>"""
    else:
        table = '<p class="greenhouse-dashboard__empty">No Greenhouse jobs available</p>'

    return f"""<div class="greenhouse-dashboard">
  <div class="greenhouse-dashboard__header">
    <h1>Greenhouse Job Board Dashboard</h1>
    <form method="post" action="{escape(refresh_action)}">
      <button type="submit">Refresh Jobs</button>
    </form>
  </div>{alert}
  {error}
  <div class="greenhouse-dashboard__stats">{cards}</div>
  {table}
</div>"""


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request, service: DashboardService = Depends(get_dashboard_service)):
    """Counts and the most recently updated jobs."""
    view = await service.load()
    return HTMLResponse(render_dashboard(view, refresh_action=str(request.url_for("refresh_dashboard").path)))


@router.post("/dashboard/refresh", name="refresh_dashboard")
async def refresh_dashboard(request: Request, service: DashboardService = Depends(get_dashboard_service)):
    """Clear the cache, force a sync, then reload the widget. A failed sync renders the widget with the error."""
    try:
        synced = await service.refresh()
    except GreenhousePluginException as e:
        logger.warning(f"Dashboard refresh failed: {e.message}")
        view = await service.error_view(e.message)
        return HTMLResponse(render_dashboard(view, refresh_action=str(request.url_for("refresh_dashboard").path)))
    logger.info(f"Dashboard refresh synced {synced} jobs")
    return RedirectResponse(
        url=str(request.url_for("dashboard").path),
        status_code=status.HTTP_303_SEE_OTHER,
    )
