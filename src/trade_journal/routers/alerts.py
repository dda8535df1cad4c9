"""Price alert routes."""
from fastapi import APIRouter

from trade_journal.deps import ViewsDep
from trade_journal.schemas import AlertsPage

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=AlertsPage)
async def get_alerts(views: ViewsDep) -> AlertsPage:
    view = await views.alerts()
    return view.snapshot()


@router.delete("/{alert_id}", response_model=AlertsPage)
async def delete_alert(alert_id: int, views: ViewsDep) -> AlertsPage:
    view = await views.alerts()
    await view.delete(alert_id)
    return view.snapshot()
