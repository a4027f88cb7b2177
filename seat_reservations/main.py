"""
Seat Reservations - service wiring

Builds one FacilityService that owns all engine state:
- Inventory manager and booking ledger, loaded from the persistent store
  (or the seed when nothing usable is stored)
- Reservation engine and admin controller sharing one set of item locks
- The configured persistence backend

The presentation layer holds on to the FacilityService and calls into it;
there is no module-level state.
"""

from dataclasses import dataclass
from typing import Optional

from seat_reservations.core.config import Settings, get_settings
from seat_reservations.core.logging import setup_logging, get_logger
from seat_reservations.infrastructure.locks import KeyedLocks
from seat_reservations.services.admin_service import AdminController
from seat_reservations.services.interfaces.store import PersistentStore
from seat_reservations.services.inventory_service import InventoryManager
from seat_reservations.services.ledger_service import BookingLedger
from seat_reservations.services.reservation_service import ReservationEngine
from seat_reservations.services.state_service import StateRepository
from seat_reservations.services.store_factory import get_store

logger = get_logger(__name__)


@dataclass
class FacilityService:
    inventory: InventoryManager
    ledger: BookingLedger
    reservations: ReservationEngine
    admin: AdminController
    repository: StateRepository

    def close(self) -> None:
        self.repository.store.close()
        logger.info("service_closed")


def create_service(
    settings: Optional[Settings] = None,
    store: Optional[PersistentStore] = None,
) -> FacilityService:
    """Load persisted state and wire the engine components together."""
    settings = settings or get_settings()
    store = store if store is not None else get_store(settings)
    repository = StateRepository(store)

    courses = repository.load_courses()
    study_hall_seats = repository.load_study_hall_seats()
    bookings = repository.load_bookings()

    inventory = InventoryManager(courses, study_hall_seats)
    ledger = BookingLedger(bookings)
    locks = KeyedLocks()

    logger.info(
        "state_loaded",
        courses=len(inventory.courses()),
        study_hall_seats=inventory.study_hall_seats,
        bookings=len(ledger),
        seeded=courses is None,
    )

    return FacilityService(
        inventory=inventory,
        ledger=ledger,
        reservations=ReservationEngine(
            inventory,
            ledger,
            repository,
            locks=locks,
            default_hours=settings.STUDY_HALL_DEFAULT_HOURS,
        ),
        admin=AdminController(
            inventory,
            ledger,
            repository,
            admin_secret=settings.ADMIN_SECRET,
            locks=locks,
            resize_step=settings.STUDY_HALL_RESIZE_STEP,
        ),
        repository=repository,
    )


def bootstrap(settings: Optional[Settings] = None) -> FacilityService:
    """Process entry point: configure logging, then build the service."""
    settings = settings or get_settings()
    setup_logging(settings)
    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        store=settings.STORE_BACKEND,
    )
    return create_service(settings)
