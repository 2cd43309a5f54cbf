"""Status codes, roles and other fixed enumerations"""


class Status:
    ACTIVE = 1
    INACTIVE = 2
    DELETED = 3


class OrderStatus:
    DRAFT = 10
    SUBMITTED = 11
    PROCESSING = 12
    COMPLETED = 13
    CANCELLED = 14


class Role:
    ADMIN = "ADMIN"
    CLIENT = "CLIENT"


class AccountType:
    SHIP_TO = "SHIP_TO"
    BILL_TO = "BILL_TO"
    BOTH = "BOTH"


ROLES = (Role.ADMIN, Role.CLIENT)
ACCOUNT_TYPES = (AccountType.SHIP_TO, AccountType.BILL_TO, AccountType.BOTH)
UOMS = ("EA", "CS", "PL", "LB", "KG")
EDITABLE_STATUSES = (Status.ACTIVE, Status.INACTIVE)

STATUS_CATALOG = [
    (Status.ACTIVE, "Active", "Record is active", "ALL"),
    (Status.INACTIVE, "Inactive", "Record is inactive", "ALL"),
    (Status.DELETED, "Deleted", "Record is deleted", "ALL"),
    (OrderStatus.DRAFT, "Draft", "Order is in draft", "ORDER"),
    (OrderStatus.SUBMITTED, "Submitted", "Order has been submitted", "ORDER"),
    (OrderStatus.PROCESSING, "Processing", "Order is being processed", "ORDER"),
    (OrderStatus.COMPLETED, "Completed", "Order has been completed", "ORDER"),
    (OrderStatus.CANCELLED, "Cancelled", "Order has been cancelled", "ORDER"),
]

STATUS_NAMES = {code: name for code, name, _, _ in STATUS_CATALOG}

ORDER_NUMBER_PREFIX = "ORD"
MIN_PASSWORD_LENGTH = 8
