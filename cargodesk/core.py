from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from cargodesk.application.billing.use_cases import InvoiceManagementUseCase, PaymentUseCase
from cargodesk.application.customers.use_cases import CustomerManagementUseCase
from cargodesk.application.customs.use_cases import CustomsDeclarationUseCase
from cargodesk.application.identity.use_cases import (
    AuthenticateUserUseCase,
    GetUserByIdUseCase,
    RefreshAccessTokenUseCase,
    RegisterCustomerUseCase,
    UpdateUserUseCase,
    UserManagementUseCase,
)
from cargodesk.application.notifications.services import CustomerNotifier
from cargodesk.application.notifications.use_cases import (
    DispatchNotificationsUseCase,
    NotificationUseCase,
)
from cargodesk.application.routing.use_cases import DeliveryRouteUseCase, DriverManagementUseCase
from cargodesk.application.shipping.use_cases import RateQuoteUseCase, ShipmentManagementUseCase
from cargodesk.application.support.use_cases import SupportTicketUseCase
from cargodesk.application.warehouses.use_cases import WarehouseManagementUseCase
from cargodesk.config import get_settings
from cargodesk.domain.routing.services.route_sequencer import RouteSequencer
from cargodesk.domain.shipping.services.rate_calculator import RateCalculator
from cargodesk.domain.shipping.services.tracking_history_generator import (
    TrackingHistoryGenerator,
)
from cargodesk.infrastructure.billing.repositories import InvoiceRepository, PaymentRepository
from cargodesk.infrastructure.customers.repositories import CustomerRepository
from cargodesk.infrastructure.customs.repositories import CustomsDeclarationRepository
from cargodesk.infrastructure.identity.repositories import UserRepository
from cargodesk.infrastructure.identity.services.password_service_adapter import (
    PasswordServiceAdapter,
)
from cargodesk.infrastructure.identity.services.token_service_adapter import TokenServiceAdapter
from cargodesk.infrastructure.notifications.repositories import NotificationRepository
from cargodesk.infrastructure.notifications.services import LoggingNotificationSender
from cargodesk.infrastructure.routing.repositories import (
    DeliveryRouteRepository,
    DriverRepository,
)
from cargodesk.infrastructure.shipping.repositories import ShipmentRepository
from cargodesk.infrastructure.support.repositories import SupportTicketRepository
from cargodesk.infrastructure.warehouses.repositories import WarehouseRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    customer_repository = providers.Factory(CustomerRepository, db=db)
    warehouse_repository = providers.Factory(WarehouseRepository, db=db)
    shipment_repository = providers.Factory(ShipmentRepository, db=db)
    invoice_repository = providers.Factory(InvoiceRepository, db=db)
    payment_repository = providers.Factory(PaymentRepository, db=db)
    customs_declaration_repository = providers.Factory(CustomsDeclarationRepository, db=db)
    support_ticket_repository = providers.Factory(SupportTicketRepository, db=db)
    notification_repository = providers.Factory(NotificationRepository, db=db)
    driver_repository = providers.Factory(DriverRepository, db=db)
    delivery_route_repository = providers.Factory(DeliveryRouteRepository, db=db)

    # Services
    password_service = providers.Factory(PasswordServiceAdapter)
    token_service = providers.Factory(TokenServiceAdapter)
    notification_sender = providers.Factory(LoggingNotificationSender)
    tracking_history_generator = providers.Factory(TrackingHistoryGenerator)
    rate_calculator = providers.Factory(RateCalculator)
    route_sequencer = providers.Factory(RouteSequencer)
    customer_notifier = providers.Factory(
        CustomerNotifier,
        notification_repository=notification_repository,
    )

    # Identity use cases
    authenticate_user_use_case = providers.Factory(
        AuthenticateUserUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )
    get_user_by_id_use_case = providers.Factory(
        GetUserByIdUseCase,
        user_repository=user_repository,
    )
    refresh_access_token_use_case = providers.Factory(
        RefreshAccessTokenUseCase,
        user_repository=user_repository,
        token_service=token_service,
    )
    register_customer_use_case = providers.Factory(
        RegisterCustomerUseCase,
        user_repository=user_repository,
        customer_repository=customer_repository,
        password_service=password_service,
        token_service=token_service,
    )
    update_user_use_case = providers.Factory(
        UpdateUserUseCase,
        user_repository=user_repository,
        password_service=password_service,
    )
    user_management_use_case = providers.Factory(
        UserManagementUseCase,
        user_repository=user_repository,
        password_service=password_service,
    )

    # Customers and warehouses
    customer_management_use_case = providers.Factory(
        CustomerManagementUseCase,
        customer_repository=customer_repository,
    )
    warehouse_management_use_case = providers.Factory(
        WarehouseManagementUseCase,
        warehouse_repository=warehouse_repository,
    )

    # Shipping module
    shipment_management_use_case = providers.Factory(
        ShipmentManagementUseCase,
        shipment_repository=shipment_repository,
        customer_repository=customer_repository,
        warehouse_repository=warehouse_repository,
        customer_notifier=customer_notifier,
        history_generator=tracking_history_generator,
        tracking_url_format=settings.provided.TRACKING_URL_FORMAT,
    )
    rate_quote_use_case = providers.Factory(
        RateQuoteUseCase,
        shipment_repository=shipment_repository,
        invoice_repository=invoice_repository,
        customer_repository=customer_repository,
        calculator=rate_calculator,
        currency=settings.provided.DEFAULT_CURRENCY,
    )

    # Billing module
    invoice_management_use_case = providers.Factory(
        InvoiceManagementUseCase,
        invoice_repository=invoice_repository,
        customer_repository=customer_repository,
        shipment_repository=shipment_repository,
        customer_notifier=customer_notifier,
        default_currency=settings.provided.DEFAULT_CURRENCY,
        default_tax_rate=settings.provided.DEFAULT_TAX_RATE,
        company_address=settings.provided.company_address,
    )
    payment_use_case = providers.Factory(
        PaymentUseCase,
        invoice_repository=invoice_repository,
        payment_repository=payment_repository,
        customer_notifier=customer_notifier,
    )

    # Customs module
    customs_declaration_use_case = providers.Factory(
        CustomsDeclarationUseCase,
        declaration_repository=customs_declaration_repository,
        shipment_repository=shipment_repository,
        default_currency=settings.provided.DEFAULT_CURRENCY,
    )

    # Support module
    support_ticket_use_case = providers.Factory(
        SupportTicketUseCase,
        ticket_repository=support_ticket_repository,
        customer_repository=customer_repository,
        user_repository=user_repository,
    )

    # Notifications module
    notification_use_case = providers.Factory(
        NotificationUseCase,
        notification_repository=notification_repository,
    )
    dispatch_notifications_use_case = providers.Factory(
        DispatchNotificationsUseCase,
        notification_repository=notification_repository,
        notification_sender=notification_sender,
    )

    # Routing module
    driver_management_use_case = providers.Factory(
        DriverManagementUseCase,
        driver_repository=driver_repository,
    )
    delivery_route_use_case = providers.Factory(
        DeliveryRouteUseCase,
        route_repository=delivery_route_repository,
        driver_repository=driver_repository,
        warehouse_repository=warehouse_repository,
        shipment_repository=shipment_repository,
        shipment_use_case=shipment_management_use_case,
        sequencer=route_sequencer,
    )


# Initialize container
container = Container()
