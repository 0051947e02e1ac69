"""In-memory repositories used by the service and route tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from werkzeug.security import generate_password_hash

from src.site_ledger.site_ledger.container import Container, Repositories, wire
from src.site_ledger.site_ledger.core.enums import ProjectStatus, Role
from src.site_ledger.site_ledger.projects.model import Project
from src.site_ledger.site_ledger.purchases.model import Material
from src.site_ledger.site_ledger.users.model import User
from src.site_ledger.site_ledger.workers.model import Worker, WorkerType


def _in_range(day: date, date_from: Optional[date], date_to: Optional[date]) -> bool:
    if date_from and day < date_from:
        return False
    if date_to and day > date_to:
        return False
    return True


class _Table:
    """Rows keyed by id; ``id_field`` names the dataclass field holding it."""

    id_field = "id"
    date_field = "date"

    def __init__(self):
        self.rows: dict[int, object] = {}
        self._next = 0

    def get_by_id(self, row_id: int):
        return self.rows.get(row_id)

    def create(self, row) -> int:
        self._next += 1
        self.rows[self._next] = replace(row, **{self.id_field: self._next})
        return self._next

    def update(self, row) -> bool:
        row_id = getattr(row, self.id_field)
        if row_id not in self.rows:
            return False
        self.rows[row_id] = row
        return True

    def delete_by_id(self, row_id: int) -> bool:
        return self.rows.pop(row_id, None) is not None

    def _scan(self, *, project_ids=None, date_from=None, date_to=None, **equals):
        out = []
        for row in self.rows.values():
            if project_ids is not None and row.project_id not in project_ids:
                continue
            if not _in_range(getattr(row, self.date_field), date_from, date_to):
                continue
            if any(v is not None and getattr(row, k) != v for k, v in equals.items()):
                continue
            out.append(row)
        out.sort(key=lambda r: (getattr(r, self.date_field), getattr(r, self.id_field)))
        return out


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}

    def add(self, *, username: str, password: str, role: Role = Role.STAFF, is_active: bool = True) -> User:
        user = User(
            user_id=len(self.users) + 1,
            full_name=username.title(),
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            is_active=is_active,
        )
        self.users[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def list_all(self):
        return sorted(self.users.values(), key=lambda u: u.user_id)

    def create_user(self, *, full_name: str, username: str, password_hash: str, role: Role) -> int:
        user_id = max(self.users, default=0) + 1
        self.users[user_id] = User(
            user_id=user_id, full_name=full_name, username=username, password_hash=password_hash, role=role
        )
        return user_id

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], is_active=is_active)
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self.users.pop(user_id, None) is not None


class InMemoryProjects:
    def __init__(self):
        self.projects: dict[int, Project] = {}

    def add(self, name: str, status: ProjectStatus = ProjectStatus.ACTIVE) -> Project:
        project_id = self.create(name=name, status=status)
        return self.projects[project_id]

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self.projects.get(project_id)

    def get_by_name(self, name: str) -> Optional[Project]:
        return next((p for p in self.projects.values() if p.name == name), None)

    def list_all(self):
        return sorted(self.projects.values(), key=lambda p: p.name)

    def create(self, *, name: str, status: ProjectStatus) -> int:
        project_id = max(self.projects, default=0) + 1
        self.projects[project_id] = Project(project_id=project_id, name=name, status=status)
        return project_id

    def update(self, project_id: int, *, name: str, status: ProjectStatus) -> bool:
        self.projects[project_id] = replace(self.projects[project_id], name=name, status=status)
        return True

    def delete_by_id(self, project_id: int) -> bool:
        return self.projects.pop(project_id, None) is not None


class InMemoryWorkers:
    def __init__(self):
        self.workers: dict[int, Worker] = {}

    def add(self, name: str, daily_wage: str = "100", type: str = "labourer", is_active: bool = True) -> Worker:
        worker_id = self.create(name=name, type=type, daily_wage=Decimal(daily_wage), is_active=is_active)
        return self.workers[worker_id]

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self.workers.get(worker_id)

    def get_by_name(self, name: str) -> Optional[Worker]:
        return next((w for w in self.workers.values() if w.name == name), None)

    def list_all(self, *, active_only: bool = False):
        items = [w for w in self.workers.values() if w.is_active or not active_only]
        return sorted(items, key=lambda w: w.name)

    def create(self, *, name: str, type: str, daily_wage: Decimal, is_active: bool) -> int:
        worker_id = max(self.workers, default=0) + 1
        self.workers[worker_id] = Worker(
            worker_id=worker_id, name=name, type=type, daily_wage=daily_wage, is_active=is_active
        )
        return worker_id

    def update(self, worker_id: int, *, name: str, type: str, daily_wage: Decimal, is_active: bool) -> bool:
        self.workers[worker_id] = replace(
            self.workers[worker_id], name=name, type=type, daily_wage=daily_wage, is_active=is_active
        )
        return True

    def delete_by_id(self, worker_id: int) -> bool:
        return self.workers.pop(worker_id, None) is not None


class InMemoryWorkerTypes:
    def __init__(self):
        self.types: dict[int, WorkerType] = {}

    def get_by_id(self, worker_type_id: int) -> Optional[WorkerType]:
        return self.types.get(worker_type_id)

    def get_by_name(self, name: str) -> Optional[WorkerType]:
        return next((t for t in self.types.values() if t.name == name), None)

    def list_all(self):
        return sorted(self.types.values(), key=lambda t: t.name)

    def create(self, *, name: str) -> int:
        worker_type_id = max(self.types, default=0) + 1
        self.types[worker_type_id] = WorkerType(worker_type_id=worker_type_id, name=name)
        return worker_type_id


class InMemoryAttendance(_Table):
    id_field = "attendance_id"
    date_field = "work_date"

    def find_for_worker_day(self, *, worker_id: int, project_id: int, work_date: date):
        return next(
            (
                r
                for r in self.rows.values()
                if (r.worker_id, r.project_id, r.work_date) == (worker_id, project_id, work_date)
            ),
            None,
        )

    def list_filtered(self, *, worker_id=None, project_ids=None, date_from=None, date_to=None):
        return self._scan(project_ids=project_ids, date_from=date_from, date_to=date_to, worker_id=worker_id)


class InMemoryWorkerTransfers(_Table):
    id_field = "transfer_id"
    date_field = "transfer_date"

    def list_filtered(self, *, worker_id=None, project_ids=None, date_from=None, date_to=None):
        return self._scan(project_ids=project_ids, date_from=date_from, date_to=date_to, worker_id=worker_id)


class InMemoryFundTransfers(_Table):
    id_field = "fund_transfer_id"
    date_field = "transfer_date"

    def get_by_number(self, transfer_number: str):
        return next((t for t in self.rows.values() if t.transfer_number == transfer_number), None)

    def list_filtered(self, *, project_ids=None, date_from=None, date_to=None):
        return self._scan(project_ids=project_ids, date_from=date_from, date_to=date_to)


class InMemoryProjectTransfers(_Table):
    id_field = "project_transfer_id"
    date_field = "transfer_date"

    def list_filtered(self, *, project_id=None, date_from=None, date_to=None):
        rows = self._scan(date_from=date_from, date_to=date_to)
        if project_id is None:
            return rows
        return [t for t in rows if project_id in (t.from_project_id, t.to_project_id)]


class InMemoryMaterials:
    def __init__(self):
        self.materials: dict[int, Material] = {}

    def get_by_id(self, material_id: int) -> Optional[Material]:
        return self.materials.get(material_id)

    def find(self, *, name: str, unit: str) -> Optional[Material]:
        return next((m for m in self.materials.values() if (m.name, m.unit) == (name, unit)), None)

    def create(self, *, name: str, unit: str, category: str) -> int:
        material_id = max(self.materials, default=0) + 1
        self.materials[material_id] = Material(material_id=material_id, name=name, unit=unit, category=category)
        return material_id

    def list_all(self):
        return sorted(self.materials.values(), key=lambda m: (m.name, m.unit))


class InMemoryPurchases(_Table):
    id_field = "purchase_id"
    date_field = "purchase_date"

    def __init__(self, materials: InMemoryMaterials):
        super().__init__()
        self._materials = materials

    def _with_material(self, purchase):
        material = self._materials.get_by_id(purchase.material_id)
        if not material:
            return purchase
        return replace(purchase, material_name=material.name, material_unit=material.unit)

    def get_by_id(self, purchase_id: int):
        purchase = self.rows.get(purchase_id)
        return self._with_material(purchase) if purchase else None

    def list_filtered(
        self,
        *,
        project_ids=None,
        date_from=None,
        date_to=None,
        purchase_type=None,
        supplier_id=None,
        supplier_name=None,
    ):
        rows = self._scan(project_ids=project_ids, date_from=date_from, date_to=date_to, purchase_type=purchase_type)
        if supplier_id is not None or supplier_name:
            rows = [
                p
                for p in rows
                if (supplier_id is not None and p.supplier_id == supplier_id)
                or (supplier_name and p.supplier_name == supplier_name)
            ]
        return [self._with_material(p) for p in rows]


class InMemoryExpenses(_Table):
    id_field = "expense_id"
    date_field = "expense_date"

    def list_filtered(self, *, project_ids=None, date_from=None, date_to=None):
        return self._scan(project_ids=project_ids, date_from=date_from, date_to=date_to)


class InMemorySuppliers(_Table):
    id_field = "supplier_id"

    def get_by_name(self, name: str):
        return next((s for s in self.rows.values() if s.name == name), None)

    def list_all(self, *, active_only: bool = False):
        items = [s for s in self.rows.values() if s.is_active or not active_only]
        return sorted(items, key=lambda s: s.name)


class InMemorySupplierPayments(_Table):
    id_field = "payment_id"
    date_field = "payment_date"

    def list_filtered(self, *, supplier_id=None, project_id=None, date_from=None, date_to=None):
        return self._scan(date_from=date_from, date_to=date_to, supplier_id=supplier_id, project_id=project_id)


class InMemorySummaries:
    def __init__(self):
        self.rows: dict[tuple[int, date], object] = {}
        self.upserts = 0

    def get(self, *, project_id: int, summary_date: date):
        return self.rows.get((project_id, summary_date))

    def get_latest_before(self, *, project_id: int, summary_date: date):
        earlier = [s for (pid, d), s in self.rows.items() if pid == project_id and d < summary_date]
        return max(earlier, key=lambda s: s.summary_date, default=None)

    def upsert(self, summary) -> None:
        self.upserts += 1
        self.rows[(summary.project_id, summary.summary_date)] = summary

    def list_for_project(self, *, project_id: int, date_from=None, date_to=None):
        items = [
            s
            for (pid, d), s in self.rows.items()
            if pid == project_id and _in_range(d, date_from, date_to)
        ]
        return sorted(items, key=lambda s: s.summary_date)

    def delete_for_project(self, *, project_id: int) -> int:
        keys = [k for k in self.rows if k[0] == project_id]
        for k in keys:
            del self.rows[k]
        return len(keys)


def make_repositories() -> Repositories:
    materials = InMemoryMaterials()
    return Repositories(
        users=InMemoryUsers(),
        projects=InMemoryProjects(),
        workers=InMemoryWorkers(),
        worker_types=InMemoryWorkerTypes(),
        attendance=InMemoryAttendance(),
        worker_transfers=InMemoryWorkerTransfers(),
        fund_transfers=InMemoryFundTransfers(),
        project_transfers=InMemoryProjectTransfers(),
        materials=materials,
        purchases=InMemoryPurchases(materials),
        transportation=InMemoryExpenses(),
        misc_expenses=InMemoryExpenses(),
        suppliers=InMemorySuppliers(),
        supplier_payments=InMemorySupplierPayments(),
        summaries=InMemorySummaries(),
    )


def make_container() -> Container:
    return wire(make_repositories())
