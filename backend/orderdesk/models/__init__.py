# Importing the package registers every table on Base.metadata

from orderdesk.models.status import StatusCode
from orderdesk.models.user import User
from orderdesk.models.customer import Customer, Project, CustomerWarehouse
from orderdesk.models.warehouse import Warehouse
from orderdesk.models.carrier import Carrier, CarrierService
from orderdesk.models.account import Account
from orderdesk.models.material import Material
from orderdesk.models.order import OrderType, Order, OrderItem

__all__ = [
    "StatusCode",
    "User",
    "Customer",
    "Project",
    "CustomerWarehouse",
    "Warehouse",
    "Carrier",
    "CarrierService",
    "Account",
    "Material",
    "OrderType",
    "Order",
    "OrderItem",
]
