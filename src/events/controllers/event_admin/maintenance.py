from ninja_extra import api_controller, route

from common.authentication import TicketingJWTAuth
from common.controllers import UserAwareController
from events import schema
from events.service import expiry_sweeper


@api_controller("/event-admin", auth=TicketingJWTAuth(is_staff=True), tags=["Event Admin"])
class EventAdminMaintenanceController(UserAwareController):
    """Staff-only housekeeping."""

    @route.post("/sweep", url_name="sweep_expired_tickets", response=schema.SweepResultSchema)
    def sweep_expired_tickets(self) -> schema.SweepResultSchema:
        """Expire unpaid tickets past their grace window now instead of waiting for the schedule."""
        return schema.SweepResultSchema(expired=expiry_sweeper.sweep())
