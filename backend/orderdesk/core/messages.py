"""Static message catalog returned in error responses"""


class AuthMessages:
    TOKEN_REQUIRED = "Authentication token is required"
    INVALID_CREDENTIALS = "Invalid credentials"
    INVALID_TOKEN = "Invalid or expired token"
    ACCESS_DENIED = "Access denied"
    ADMIN_REQUIRED = "Admin access required"
    CLIENT_ONLY = "Access denied. Client access only."
    USER_INACTIVE = "User account is not active"
    ACCOUNT_INACTIVE = "Account is inactive"
    USER_EXISTS = "User already exists"
    NO_CUSTOMER = "User is not associated with a customer"


class ValidationMessages:
    FAILED = "Validation failed"
    PASSWORD_LENGTH = "Password must be at least 8 characters long"
    INVALID_EMAIL = "Invalid email format"
    INVALID_STATUS = "Invalid status value"
    INVALID_ROLE = "Invalid role"
    INVALID_UOM = "Invalid unit of measure"
    INVALID_ACCOUNT_TYPE = "Invalid account type"


class NotFoundMessages:
    USER = "User not found"
    CUSTOMER = "Customer not found"
    WAREHOUSE = "Warehouse not found"
    CARRIER = "Carrier not found"
    CARRIER_SERVICE = "Carrier service not found"
    MATERIAL = "Material not found"
    ORDER = "Order not found"
    PROJECT = "Project not found"


class OperationMessages:
    CREATE_FAILED = "Error creating record"
    UPDATE_FAILED = "Error updating record"
    DELETE_FAILED = "Error deleting record"
    FETCH_FAILED = "Error fetching records"
    INTERNAL = "Internal server error"


class CustomerMessages:
    EXISTS = "Customer with this code already exists"
    PROJECTS_REQUIRED = "At least one project is required"
    DEFAULT_PROJECT_REQUIRED = "Exactly one project must be marked as default"
    USERS_REQUIRED = "At least one user is required"
    HAS_DEPENDENCIES = "Customer has orders or materials and cannot be deleted"


class WarehouseMessages:
    EXISTS = "Warehouse with this code already exists"
    DEACTIVATED = "Warehouse has been deactivated"
    INVALID_CAPACITY = "Capacity must be a non-negative number"


class CarrierMessages:
    EXISTS = "Carrier with this code already exists"
    SERVICE_EXISTS = "Carrier service with this code already exists"


class MaterialMessages:
    EXISTS = "Material with this code already exists"
    INVALID_QUANTITY = "Available quantity must be a non-negative number"


class OrderMessages:
    ITEMS_REQUIRED = "At least one item is required"
    INVALID_QUANTITY = "Item quantity must be greater than 0"
    ONLY_DRAFT_UPDATE = "Only draft orders can be updated"
    ONLY_DRAFT_DELETE = "Only draft orders can be deleted"
    NUMBER_UNAVAILABLE = "Could not allocate an order number"


def required(field_label: str) -> str:
    return f"{field_label} is required"


def too_long(field_label: str, max_length: int) -> str:
    return f"{field_label} must be at most {max_length} characters"
