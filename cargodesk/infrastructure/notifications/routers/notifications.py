import logging

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.notifications.use_cases import (
    DispatchNotificationsUseCase,
    NotificationUseCase,
)
from cargodesk.core import container
from cargodesk.domain.identity.entities.user import User
from cargodesk.domain.notifications.entities.notification import (
    NotificationChannel,
    NotificationStatus,
    RecipientType,
)
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from cargodesk.infrastructure.identity.dependencies import CurrentUser, StaffUser, customer_scope
from cargodesk.infrastructure.notifications.schemas import (
    DispatchResponse,
    MarkAllReadResponse,
    NotificationCreateRequest,
    NotificationResponse,
    UnreadCountResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/notifications", tags=["notifications"])


def _inbox(user: User) -> tuple[RecipientType, int]:
    """The inbox a signed-in user reads: their customer account or their own user."""
    customer_id = customer_scope(user)
    if customer_id is not None:
        return RecipientType.CUSTOMER, customer_id
    return RecipientType.USER, user.id.value


def _access(user: User) -> tuple[RecipientType, int] | None:
    """Staff may open any notification; everyone else only their inbox."""
    return None if user.is_staff else _inbox(user)


@router.get("")
def list_notifications(
    current_user: CurrentUser,
    pagination: PaginationParams,
    unread_only: bool = False,
    notification_status: NotificationStatus | None = Query(None, alias="status"),
    channel: NotificationChannel | None = None,
    all_recipients: bool = Query(False, description="Staff only: every inbox"),
    use_case: NotificationUseCase = Depends(inject_use_case(container.notification_use_case)),
) -> PaginatedResponse[NotificationResponse]:
    """The signed-in user's notifications, newest first."""
    recipient = None if all_recipients and current_user.is_staff else _inbox(current_user)
    result = use_case.list_notifications(
        pagination,
        recipient,
        unread_only=unread_only,
        status=notification_status,
        channel=channel,
    )
    return PaginatedResponse.from_result(result, NotificationResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_notification(
    staff: StaffUser,
    request: NotificationCreateRequest,
    use_case: NotificationUseCase = Depends(inject_use_case(container.notification_use_case)),
) -> NotificationResponse:
    data = request.model_dump(exclude={"type"})
    notification = use_case.create_notification(
        notification_type=request.type, created_by=staff.id.value, **data
    )
    return NotificationResponse.from_domain(notification)


@router.get("/unread-count")
def get_unread_count(
    current_user: CurrentUser,
    use_case: NotificationUseCase = Depends(inject_use_case(container.notification_use_case)),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread=use_case.unread_count(_inbox(current_user)))


@router.post("/read-all")
def mark_all_read(
    current_user: CurrentUser,
    use_case: NotificationUseCase = Depends(inject_use_case(container.notification_use_case)),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(marked=use_case.mark_all_read(_inbox(current_user)))


@router.post("/dispatch")
def dispatch_notifications(
    staff: StaffUser,
    limit: int = Query(100, ge=1, le=1000),
    use_case: DispatchNotificationsUseCase = Depends(
        inject_use_case(container.dispatch_notifications_use_case)
    ),
) -> DispatchResponse:
    """Send pending notifications whose time has come."""
    summary = use_case.dispatch_due(limit)
    logger.info(f"Dispatch run by user {staff.id.value}: {summary}")
    return DispatchResponse(processed=summary.processed, sent=summary.sent, failed=summary.failed)


@router.get("/{notification_id}")
def get_notification(
    notification_id: int,
    current_user: CurrentUser,
    use_case: NotificationUseCase = Depends(inject_use_case(container.notification_use_case)),
) -> NotificationResponse:
    notification = use_case.get_notification(notification_id, _access(current_user))
    return NotificationResponse.from_domain(notification)


@router.post("/{notification_id}/read")
def mark_notification_read(
    notification_id: int,
    current_user: CurrentUser,
    use_case: NotificationUseCase = Depends(inject_use_case(container.notification_use_case)),
) -> NotificationResponse:
    notification = use_case.mark_read(notification_id, _inbox(current_user))
    return NotificationResponse.from_domain(notification)


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: int,
    current_user: CurrentUser,
    use_case: NotificationUseCase = Depends(inject_use_case(container.notification_use_case)),
) -> SuccessResponse:
    use_case.delete_notification(notification_id, _access(current_user))
    return SuccessResponse(success=True, message="Notification deleted")
