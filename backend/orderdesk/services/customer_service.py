"""
Customer wizard: basic info, projects and users persisted together.

Create and update run as one transaction each; any failure rolls back the
customer together with its projects and users.
"""
from typing import Dict, List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.config import settings
from orderdesk.core.constants import ROLES, Role, Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import (
    AuthMessages, CustomerMessages, NotFoundMessages, OperationMessages, ValidationMessages, required,
)
from orderdesk.core.security import get_password_hash
from orderdesk.models import Account, Customer, CustomerWarehouse, Project, User
from orderdesk.repositories.customer_repository import CustomerRepository, ProjectRepository
from orderdesk.repositories.user_repository import UserRepository
from orderdesk.schemas.customer import CustomerCreate, CustomerUpdate, CustomerUserInput, ProjectInput
from orderdesk.services import validation
from orderdesk.services.auth_service import unique_user_lookup_code
from orderdesk.services.result import CONFLICT, NOT_FOUND, ServiceResult

logger = get_logger(__name__)

BASIC_FIELDS = {
    "lookup_code": "Customer Code",
    "name": "Customer Name",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip_code": "Zip Code",
}
OPTIONAL_FIELDS = ("phone", "email", "status")
RENAME_PLACEHOLDER = "~renaming-"


def validate_basic_info(data: dict) -> List[str]:
    errors: List[str] = []
    validation.check_required(errors, data, BASIC_FIELDS)
    validation.check_max_length(errors, data.get("lookup_code"), "Customer Code", 50)
    validation.check_max_length(errors, data.get("name"), "Customer Name", 100)
    validation.check_email(errors, data.get("email"))
    validation.check_status(errors, data.get("status"))
    return errors


def validate_projects(projects: List[ProjectInput]) -> List[str]:
    if not projects:
        return [CustomerMessages.PROJECTS_REQUIRED]
    errors: List[str] = []
    for index, project in enumerate(projects, start=1):
        if validation.is_blank(project.name):
            errors.append(required(f"Project {index} name"))
        validation.check_status(errors, project.status)
    if sum(1 for p in projects if p.is_default) != 1:
        errors.append(CustomerMessages.DEFAULT_PROJECT_REQUIRED)
    codes = [p.lookup_code for p in projects if p.lookup_code]
    if len(codes) != len(set(codes)):
        errors.append("Project codes must be unique")
    return errors


def validate_users(users: List[CustomerUserInput]) -> List[str]:
    if not users:
        return [CustomerMessages.USERS_REQUIRED]
    errors: List[str] = []
    for user in users:
        validation.check_email(errors, user.email, required=True)
        if user.password:
            validation.check_password(errors, user.password)
        if user.role and user.role not in ROLES:
            errors.append(ValidationMessages.INVALID_ROLE)
        validation.check_status(errors, user.status)
    emails = [u.email.strip().lower() for u in users if u.email]
    if len(emails) != len(set(emails)):
        errors.append("User emails must be unique")
    return errors


class CustomerService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.customers = CustomerRepository(db)
        self.projects = ProjectRepository(db)
        self.users = UserRepository(db)

    async def list_customers(self) -> ServiceResult:
        return ServiceResult.ok(await self.customers.list_all())

    async def get_customer(self, customer_id: int) -> ServiceResult:
        customer = await self.customers.get_full(customer_id)
        if customer is None:
            return ServiceResult.fail(NotFoundMessages.CUSTOMER, NOT_FOUND)
        return ServiceResult.ok(customer)

    async def _released_codes(self, customer: Customer, projects: List[ProjectInput]) -> set:
        """Codes an update frees: dropped projects that get deleted, and renamed ones"""
        submitted = {p.id: p for p in projects if p.id is not None}
        released = set()
        for project in customer.projects:
            data = submitted.get(project.id)
            if data is None:
                if not await self.projects.count_materials(project.id):
                    released.add(project.lookup_code)
            elif data.lookup_code and data.lookup_code != project.lookup_code:
                released.add(project.lookup_code)
        return released

    async def _project_code_conflicts(self, projects: List[ProjectInput], customer: Optional[Customer] = None) -> List[str]:
        """Submitted codes held by a project that keeps its code"""
        released = await self._released_codes(customer, projects) if customer is not None else set()
        taken = []
        for project in projects:
            if not project.lookup_code or project.lookup_code in released:
                continue
            if await self.projects.lookup_code_taken(project.lookup_code, exclude_id=project.id):
                taken.append(project.lookup_code)
        return taken

    async def _new_project_code(self, customer: Customer, reserved: set) -> str:
        index = 1
        while True:
            code = f"{customer.lookup_code}-P{index}"
            if code not in reserved and not await self.projects.lookup_code_taken(code):
                reserved.add(code)
                return code
            index += 1

    async def _add_project(self, customer: Customer, data: ProjectInput, user_id: Optional[int], reserved: set) -> Project:
        return self.projects.add(Project(
            lookup_code=data.lookup_code or await self._new_project_code(customer, reserved),
            name=data.name.strip(),
            description=data.description,
            customer_id=customer.id,
            is_default=data.is_default,
            status=data.status or Status.ACTIVE,
            created_by=user_id,
            modified_by=user_id,
        ))

    async def _add_user(self, customer: Customer, data: CustomerUserInput, user_id: Optional[int], reserved: set) -> User:
        email = data.email.strip().lower()
        lookup_code = await unique_user_lookup_code(self.users, email, reserved)
        reserved.add(lookup_code)
        return self.users.add(User(
            email=email,
            password=get_password_hash(data.password or settings.DEFAULT_USER_PASSWORD),
            role=data.role or Role.CLIENT,
            customer_id=customer.id,
            lookup_code=lookup_code,
            status=data.status or Status.ACTIVE,
            created_by=user_id,
            modified_by=user_id,
        ))

    async def create_customer(self, data: CustomerCreate, user_id: Optional[int] = None) -> ServiceResult:
        fields = data.model_dump(include=set(BASIC_FIELDS) | set(OPTIONAL_FIELDS))
        errors = validate_basic_info(fields) + validate_projects(data.projects) + validate_users(data.users)
        if errors:
            return ServiceResult.invalid(errors)

        if await self.customers.lookup_code_taken(data.lookup_code.strip()):
            return ServiceResult.fail(CustomerMessages.EXISTS, CONFLICT)
        taken_emails = await self.users.find_taken_emails(u.email.strip().lower() for u in data.users)
        if taken_emails:
            return ServiceResult(success=False, error=AuthMessages.USER_EXISTS, errors=taken_emails, error_type=CONFLICT)
        taken_codes = await self._project_code_conflicts(data.projects)
        if taken_codes:
            return ServiceResult(success=False, error="Project with this code already exists", errors=taken_codes, error_type=CONFLICT)

        try:
            customer = self.customers.add(Customer(
                lookup_code=data.lookup_code.strip(),
                name=data.name.strip(),
                address=data.address,
                city=data.city,
                state=data.state,
                zip_code=data.zip_code,
                phone=data.phone,
                email=data.email,
                status=data.status or Status.ACTIVE,
                created_by=user_id,
                modified_by=user_id,
            ))
            await self.db.flush()

            reserved_projects = {p.lookup_code for p in data.projects if p.lookup_code}
            for project in data.projects:
                await self._add_project(customer, project, user_id, reserved_projects)
            reserved_users: set = set()
            for user in data.users:
                await self._add_user(customer, user, user_id, reserved_users)

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create customer {data.lookup_code}: {e}")
            return ServiceResult.fail(OperationMessages.CREATE_FAILED)

        logger.info(f"Created customer {customer.lookup_code} with {len(data.projects)} projects and {len(data.users)} users")
        return ServiceResult.ok(await self.customers.get_full(customer.id))

    async def update_customer(self, customer_id: int, data: CustomerUpdate, user_id: Optional[int] = None) -> ServiceResult:
        customer = await self.customers.get_full(customer_id)
        if customer is None:
            return ServiceResult.fail(NotFoundMessages.CUSTOMER, NOT_FOUND)

        changes = data.model_dump(exclude_unset=True, include=set(BASIC_FIELDS) | set(OPTIONAL_FIELDS))
        if changes.get("status") is None:
            changes.pop("status", None)
        merged = {name: getattr(customer, name) for name in list(BASIC_FIELDS) + list(OPTIONAL_FIELDS)}
        merged.update(changes)
        errors = validate_basic_info(merged)
        if data.projects is not None:
            errors += validate_projects(data.projects)
            own_ids = {p.id for p in customer.projects}
            if any(p.id is not None and p.id not in own_ids for p in data.projects):
                errors.append(NotFoundMessages.PROJECT)
        if data.users is not None:
            errors += validate_users(data.users)
        if errors:
            return ServiceResult.invalid(errors)

        if "lookup_code" in changes and await self.customers.lookup_code_taken(changes["lookup_code"], exclude_id=customer.id):
            return ServiceResult.fail(CustomerMessages.EXISTS, CONFLICT)
        if data.users is not None:
            taken_emails = await self.users.find_taken_emails(
                (u.email.strip().lower() for u in data.users), exclude_customer_id=customer.id
            )
            if taken_emails:
                return ServiceResult(success=False, error=AuthMessages.USER_EXISTS, errors=taken_emails, error_type=CONFLICT)
        if data.projects is not None:
            taken_codes = await self._project_code_conflicts(data.projects, customer)
            if taken_codes:
                return ServiceResult(success=False, error="Project with this code already exists", errors=taken_codes, error_type=CONFLICT)

        try:
            for field, value in changes.items():
                setattr(customer, field, value)
            customer.modified_by = user_id

            if data.projects is not None:
                await self._replace_projects(customer, data.projects, user_id)
            if data.users is not None:
                await self._replace_users(customer, data.users, user_id)

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update customer {customer_id}: {e}")
            return ServiceResult.fail(OperationMessages.UPDATE_FAILED)

        logger.info(f"Updated customer {customer.lookup_code}")
        return ServiceResult.ok(await self.customers.get_full(customer.id))

    async def _replace_projects(self, customer: Customer, projects: List[ProjectInput], user_id: Optional[int]) -> None:
        """Projects still owning materials are deactivated instead of deleted"""
        existing: Dict[int, Project] = {p.id: p for p in customer.projects}
        keep_ids = {p.id for p in projects if p.id is not None}

        for project in existing.values():
            if project.id in keep_ids:
                continue
            if await self.projects.count_materials(project.id):
                project.status = Status.INACTIVE
                project.is_default = False
                project.modified_by = user_id
            else:
                await self.projects.delete(project)
        # Renamed rows hold a placeholder code until their final code is written
        for data in projects:
            if data.id is not None and data.lookup_code and data.lookup_code != existing[data.id].lookup_code:
                existing[data.id].lookup_code = f"{RENAME_PLACEHOLDER}{data.id}"
        await self.db.flush()

        reserved = {p.lookup_code for p in projects if p.lookup_code}
        for data in projects:
            if data.id is None:
                await self._add_project(customer, data, user_id, reserved)
                continue
            project = existing[data.id]
            project.name = data.name.strip()
            project.description = data.description
            project.is_default = data.is_default
            if data.lookup_code:
                project.lookup_code = data.lookup_code
            if data.status is not None:
                project.status = data.status
            project.modified_by = user_id

    async def _replace_users(self, customer: Customer, users: List[CustomerUserInput], user_id: Optional[int]) -> None:
        """Users are matched by email; passwords survive unless a new one is given"""
        existing: Dict[str, User] = {u.email: u for u in customer.users}
        wanted = {u.email.strip().lower(): u for u in users}

        for email, user in existing.items():
            if email not in wanted:
                await self.users.delete(user)
        await self.db.flush()

        reserved: set = set()
        for email, data in wanted.items():
            user = existing.get(email)
            if user is None:
                await self._add_user(customer, data, user_id, reserved)
                continue
            if data.password:
                user.password = get_password_hash(data.password)
            if data.role:
                user.role = data.role
            if data.status is not None:
                user.status = data.status
            user.modified_by = user_id

    async def delete_customer(self, customer_id: int) -> ServiceResult:
        customer = await self.customers.get(customer_id)
        if customer is None:
            return ServiceResult.fail(NotFoundMessages.CUSTOMER, NOT_FOUND)
        if await self.customers.count_orders(customer_id) or await self.customers.count_materials(customer_id):
            return ServiceResult.fail(CustomerMessages.HAS_DEPENDENCIES, CONFLICT)
        lookup_code = customer.lookup_code

        try:
            await self.db.execute(delete(Project).where(Project.customer_id == customer_id))
            await self.db.execute(delete(User).where(User.customer_id == customer_id))
            await self.db.execute(delete(Account).where(Account.customer_id == customer_id))
            await self.db.execute(delete(CustomerWarehouse).where(CustomerWarehouse.customer_id == customer_id))
            await self.db.execute(delete(Customer).where(Customer.id == customer_id))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete customer {customer_id}: {e}")
            return ServiceResult.fail(OperationMessages.DELETE_FAILED)

        logger.info(f"Deleted customer {lookup_code}")
        return ServiceResult.ok()
