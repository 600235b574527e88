from uuid import UUID

from ninja_extra import api_controller, route

from common.authentication import TicketingJWTAuth
from common.controllers import UserAwareController
from common.throttling import ScannerThrottle
from events import schema
from events.service import entry_validator


@api_controller("/scanner", auth=TicketingJWTAuth(), tags=["Scanner"], throttle=ScannerThrottle())
class ScannerController(UserAwareController):
    """Door scanning for event organizers.

    Rejections are ordinary results: every scan answers 200 with an outcome the scanner displays.
    """

    @route.post("/scan", url_name="scan_ticket", response=schema.ScanResultSchema)
    def scan(self, payload: schema.ScanRequestSchema) -> schema.ScanResultSchema:
        result = entry_validator.scan(payload.code, scanner=self.user())
        return schema.ScanResultSchema.from_result(result)

    @route.post(
        "/tickets/{uuid:ticket_id}/confirm-cash",
        url_name="confirm_cash_and_validate",
        response=schema.ScanResultSchema,
    )
    def confirm_cash(self, ticket_id: UUID) -> schema.ScanResultSchema:
        """Collect cash for a pay-at-venue ticket and let the holder in."""
        result = entry_validator.confirm_cash_and_validate(ticket_id, scanner=self.user())
        return schema.ScanResultSchema.from_result(result)
