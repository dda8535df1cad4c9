"""Notification preference routes."""
from fastapi import APIRouter

from trade_journal.deps import ViewsDep
from trade_journal.schemas import NotificationPreferences, NotificationsPage

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationsPage)
async def get_notifications(views: ViewsDep) -> NotificationsPage:
    view = await views.notifications()
    return view.snapshot()


@router.put("", response_model=NotificationsPage)
async def save_notifications(
    preferences: NotificationPreferences, views: ViewsDep
) -> NotificationsPage:
    """Overwrite the email notification preferences."""
    view = await views.notifications()
    await view.save(preferences)
    return view.snapshot()


@router.post("/test", response_model=NotificationsPage)
async def send_test_notification(views: ViewsDep) -> NotificationsPage:
    view = await views.notifications()
    await view.send_test()
    return view.snapshot()
