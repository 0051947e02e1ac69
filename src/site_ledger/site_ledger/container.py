from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import PaymentStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .expenses.mysql_expense_repository import MISC_TABLE, TRANSPORTATION_TABLE, MySQLExpenseRepository
from .expenses.repository import ExpenseRepository
from .expenses.service import ExpenseService
from .funds.mysql_fund_repository import MySQLFundTransferRepository, MySQLProjectFundTransferRepository
from .funds.repository import FundTransferRepository, ProjectFundTransferRepository
from .funds.service import FundTransferService, ProjectFundTransferService
from .ledger import LedgerSources
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .purchases.mysql_purchase_repository import MySQLMaterialRepository, MySQLPurchaseRepository
from .purchases.repository import MaterialRepository, PurchaseRepository
from .purchases.service import PurchaseService
from .reports.calculator.standard_calculator import StandardStatementCalculator
from .reports.service import StatementService
from .summaries.mysql_summary_repository import MySQLDailySummaryRepository
from .summaries.repository import DailySummaryRepository
from .summaries.service import DailySummaryService
from .suppliers.mysql_supplier_repository import MySQLSupplierPaymentRepository, MySQLSupplierRepository
from .suppliers.repository import SupplierPaymentRepository, SupplierRepository
from .suppliers.service import SupplierService
from .transfers.mysql_transfer_repository import MySQLWorkerTransferRepository
from .transfers.repository import WorkerTransferRepository
from .transfers.service import WorkerTransferService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .workers.mysql_worker_repository import MySQLWorkerRepository, MySQLWorkerTypeRepository
from .workers.repository import WorkerRepository, WorkerTypeRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    projects: ProjectRepository
    workers: WorkerRepository
    worker_types: WorkerTypeRepository
    attendance: AttendanceRepository
    worker_transfers: WorkerTransferRepository
    fund_transfers: FundTransferRepository
    project_transfers: ProjectFundTransferRepository
    materials: MaterialRepository
    purchases: PurchaseRepository
    transportation: ExpenseRepository
    misc_expenses: ExpenseRepository
    suppliers: SupplierRepository
    supplier_payments: SupplierPaymentRepository
    summaries: DailySummaryRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    repos: Repositories

    auth_service: AuthService
    user_service: UserService
    project_service: ProjectService
    worker_service: WorkerService
    attendance_service: AttendanceService
    worker_transfer_service: WorkerTransferService
    fund_transfer_service: FundTransferService
    project_transfer_service: ProjectFundTransferService
    purchase_service: PurchaseService
    transportation_service: ExpenseService
    misc_expense_service: ExpenseService
    supplier_service: SupplierService
    summary_service: DailySummaryService
    statement_service: StatementService


def wire(repos: Repositories, *, conn: Optional[DatabaseConnection] = None) -> Container:
    """Build every service on top of a set of repositories (MySQL or in-memory)."""

    sources = LedgerSources(
        attendance=repos.attendance,
        worker_transfers=repos.worker_transfers,
        fund_transfers=repos.fund_transfers,
        project_transfers=repos.project_transfers,
        purchases=repos.purchases,
        transportation=repos.transportation,
        misc_expenses=repos.misc_expenses,
    )
    summary_service = DailySummaryService(repos.summaries, repos.projects, sources)

    return Container(
        conn=conn,
        repos=repos,
        auth_service=AuthService(repos.users),
        user_service=UserService(repos.users),
        project_service=ProjectService(
            repos.projects, sources, summary_service, workers=repos.workers, materials=repos.materials
        ),
        worker_service=WorkerService(
            repos.workers,
            repos.worker_types,
            repos.projects,
            repos.attendance,
            repos.worker_transfers,
            summary_service,
        ),
        attendance_service=AttendanceService(
            repos.attendance,
            repos.workers,
            repos.projects,
            summary_service,
            strategy_factory=PaymentStrategyFactory(),
        ),
        worker_transfer_service=WorkerTransferService(
            repos.worker_transfers, repos.workers, repos.projects, summary_service
        ),
        fund_transfer_service=FundTransferService(repos.fund_transfers, repos.projects, summary_service),
        project_transfer_service=ProjectFundTransferService(repos.project_transfers, repos.projects, summary_service),
        purchase_service=PurchaseService(
            repos.purchases, repos.materials, repos.projects, repos.suppliers, summary_service
        ),
        transportation_service=ExpenseService(
            repos.transportation, repos.projects, repos.workers, summary_service, label="transportation expense"
        ),
        misc_expense_service=ExpenseService(
            repos.misc_expenses, repos.projects, repos.workers, summary_service, label="misc expense"
        ),
        supplier_service=SupplierService(repos.suppliers, repos.supplier_payments, repos.purchases, repos.projects),
        summary_service=summary_service,
        statement_service=StatementService(
            repos.workers, repos.projects, sources, calculator=StandardStatementCalculator()
        ),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    repos = Repositories(
        users=MySQLUserRepository(conn),
        projects=MySQLProjectRepository(conn),
        workers=MySQLWorkerRepository(conn),
        worker_types=MySQLWorkerTypeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        worker_transfers=MySQLWorkerTransferRepository(conn),
        fund_transfers=MySQLFundTransferRepository(conn),
        project_transfers=MySQLProjectFundTransferRepository(conn),
        materials=MySQLMaterialRepository(conn),
        purchases=MySQLPurchaseRepository(conn),
        transportation=MySQLExpenseRepository(conn, table=TRANSPORTATION_TABLE),
        misc_expenses=MySQLExpenseRepository(conn, table=MISC_TABLE),
        suppliers=MySQLSupplierRepository(conn),
        supplier_payments=MySQLSupplierPaymentRepository(conn),
        summaries=MySQLDailySummaryRepository(conn),
    )
    return wire(repos, conn=conn)
