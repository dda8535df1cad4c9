"""Email notification preferences page."""
from trade_journal.client import JournalApiClient, ValidationError
from trade_journal.polling import PricePoller
from trade_journal.schemas import NotificationPreferences, NotificationsPage
from trade_journal.views.base import PageView

SAVED_MESSAGE = (
    "Notification preferences updated successfully. If you enabled email "
    "notifications, please check your inbox for a confirmation email."
)


class NotificationsView(PageView):
    def __init__(self, client: JournalApiClient, poller: PricePoller) -> None:
        super().__init__(client, poller)
        self.preferences = NotificationPreferences()
        self.success: str | None = None

    async def _load(self) -> NotificationPreferences:
        return await self._client.get_notification_preferences()

    def _apply(self, data: NotificationPreferences) -> None:
        self.preferences = data

    async def save(self, preferences: NotificationPreferences) -> None:
        """Overwrite the stored preferences.

        Raises:
            ValidationError: Notifications are enabled without an email address.
        """
        if preferences.email_notifications_enabled and not preferences.email.strip():
            raise ValidationError("An email address is required to enable notifications")
        self.success = None
        await self._run_action(
            "Failed to update notification preferences",
            lambda: self._client.update_notification_preferences(preferences),
        )
        self.success = SAVED_MESSAGE

    async def send_test(self) -> None:
        self.success = None
        await self._run_action(
            "Failed to send test notification", self._client.send_test_notification
        )
        self.success = "Test notification sent"

    def snapshot(self) -> NotificationsPage:
        return NotificationsPage(
            error=self.error, preferences=self.preferences, success=self.success
        )
