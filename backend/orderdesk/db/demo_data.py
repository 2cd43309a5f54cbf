"""Demo data set: one customer with users, carriers, a warehouse and materials"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import AccountType, Role, Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.security import get_password_hash
from orderdesk.models import (
    Account, Carrier, CarrierService, Customer, CustomerWarehouse, Material, Project, User, Warehouse,
)

logger = get_logger(__name__)

DEMO_CUSTOMER_CODE = "ACME"
DEMO_CLIENT_EMAIL = "client@example.com"
DEMO_CLIENT_PASSWORD = "Password123!"

CARRIERS = {
    ("UPS", "UPS"): [
        ("UPS-GND", "Ground", "UPS Ground"),
        ("UPS-3DS", "3 Day Select", "UPS 3 Day Select"),
        ("UPS-2DA", "2nd Day Air", "UPS 2nd Day Air"),
    ],
    ("FEDEX", "FedEx"): [
        ("FEDEX-GND", "Ground", "FedEx Ground"),
        ("FEDEX-2DA", "2Day", "FedEx 2Day"),
        ("FEDEX-ON", "Standard Overnight", "FedEx Standard Overnight"),
    ],
}

MATERIALS = [
    ("MAT001", "Standard Box - Small", "EA", 100),
    ("MAT002", "Standard Box - Medium", "EA", 75),
    ("MAT003", "Standard Box - Large", "EA", 50),
    ("MAT004", "Packing Tape", "CS", 40),
    ("MAT005", "Shrink Wrap Pallet", "PL", 12),
]


async def load_demo_data(db: AsyncSession) -> bool:
    """Insert the demo data set unless it is already there"""
    existing = await db.execute(select(Customer.id).where(Customer.lookup_code == DEMO_CUSTOMER_CODE))
    if existing.scalar() is not None:
        logger.info("Demo data already present")
        return False

    for (code, name), services in CARRIERS.items():
        carrier = Carrier(lookup_code=code, name=name, status=Status.ACTIVE)
        carrier.services = [
            CarrierService(lookup_code=s_code, name=s_name, description=desc, status=Status.ACTIVE)
            for s_code, s_name, desc in services
        ]
        db.add(carrier)

    customer = Customer(
        lookup_code=DEMO_CUSTOMER_CODE,
        name="Acme Corporation",
        address="100 Industrial Way",
        city="Chicago",
        state="IL",
        zip_code="60601",
        phone="312-555-0100",
        email="ops@acme.example.com",
        status=Status.ACTIVE,
    )
    default_project = Project(lookup_code="ACME-DEFAULT", name="Default", is_default=True, status=Status.ACTIVE)
    retail_project = Project(lookup_code="ACME-RETAIL", name="Retail Rollout", is_default=False, status=Status.ACTIVE)
    customer.projects = [default_project, retail_project]
    customer.users = [User(
        email=DEMO_CLIENT_EMAIL,
        password=get_password_hash(DEMO_CLIENT_PASSWORD),
        role=Role.CLIENT,
        lookup_code="CLIENT",
        status=Status.ACTIVE,
    )]
    customer.accounts = [
        Account(
            lookup_code="ACME-HQ", name="Acme HQ", address="100 Industrial Way", city="Chicago",
            state="IL", zip_code="60601", account_type=AccountType.BOTH, status=Status.ACTIVE,
        ),
        Account(
            lookup_code="ACME-DOCK", name="Acme Dock", address="5 Harbor Rd", city="Gary",
            state="IN", zip_code="46401", account_type=AccountType.SHIP_TO, status=Status.ACTIVE,
        ),
    ]
    db.add(customer)

    warehouse = Warehouse(
        lookup_code="WH-CHI",
        name="Chicago DC",
        address="2000 Logistics Pkwy",
        city="Chicago",
        state="IL",
        zip_code="60638",
        capacity=50000,
        status=Status.ACTIVE,
    )
    db.add(warehouse)
    db.add(CustomerWarehouse(customer=customer, warehouse=warehouse, status=Status.ACTIVE))

    for code, description, uom, quantity in MATERIALS:
        db.add(Material(
            lookup_code=code,
            code=code,
            description=description,
            uom=uom,
            available_quantity=quantity,
            project=default_project,
            status=Status.ACTIVE,
        ))

    await db.commit()
    logger.info(f"Demo data loaded: customer {DEMO_CUSTOMER_CODE}, client {DEMO_CLIENT_EMAIL}")
    return True
