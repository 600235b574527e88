from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from ninja_extra import api_controller, route

from common.authentication import TicketingJWTAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import models, schema
from events.exceptions import UnauthorizedError
from events.service import ticket_service


@api_controller("/payments", auth=TicketingJWTAuth(), tags=["Payments"], throttle=WriteThrottle())
class PaymentController(UserAwareController):
    @route.post("/confirm", url_name="confirm_payment", response=schema.AdminTicketSchema)
    def confirm_payment(self, payload: schema.PaymentConfirmationSchema) -> models.Ticket:
        """Mark a pending online booking as paid once the processor reference is reconciled.

        Allowed for the event organizer and Django staff. Confirming again with the same reference
        is a no-op.
        """
        ticket = get_object_or_404(models.Ticket.objects.full(), pk=payload.ticket_id)
        user = self.user()
        if not (user.is_staff or ticket.event.is_organized_by(user)):
            raise UnauthorizedError(_("Only the organizer can confirm payments for this event."))
        return ticket_service.confirm_online_payment(ticket, payload.payment_ref)
