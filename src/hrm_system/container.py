from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .audit.service import AuditService
from .core.constants import DEFAULT_STORE_TIMEOUT_SECONDS, DEFAULT_SYNC_INTERVAL_SECONDS
from .leaves.service import LeaveService
from .payroll.service import PayrollService
from .state.holder import StateHolder
from .sync.client import RemoteStoreClient
from .sync.local_cache import LocalCache
from .sync.manager import SyncManager
from .sync.service import DataService
from .sync.storage import HRMStorage
from .tasks.service import TaskService
from .users.service import AuthService, EmployeeService


@dataclass(frozen=True)
class Container:
    holder: StateHolder
    storage: HRMStorage
    sync_manager: SyncManager

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    task_service: TaskService
    leave_service: LeaveService
    payroll_service: PayrollService
    audit_service: AuditService
    data_service: DataService


def build_storage(settings) -> HRMStorage:
    client = RemoteStoreClient(
        str(getattr(settings, "STORE_API_URL")),
        timeout=float(getattr(settings, "STORE_TIMEOUT", DEFAULT_STORE_TIMEOUT_SECONDS)),
    )
    return HRMStorage(client, LocalCache(getattr(settings, "LOCAL_CACHE_PATH")))


def build_container(settings, *, storage: Optional[HRMStorage] = None) -> Container:
    storage = storage or build_storage(settings)
    sync_manager = SyncManager(
        storage, interval=float(getattr(settings, "SYNC_INTERVAL_SECONDS", DEFAULT_SYNC_INTERVAL_SECONDS))
    )

    state = storage.load_data()
    sync_manager.mark_seen(state)
    holder = StateHolder(state, persist=sync_manager.push)
    sync_manager.track(lambda: holder.state)

    return Container(
        holder=holder,
        storage=storage,
        sync_manager=sync_manager,
        auth_service=AuthService(holder),
        employee_service=EmployeeService(holder),
        attendance_service=AttendanceService(holder),
        task_service=TaskService(holder),
        leave_service=LeaveService(
            holder, enforce_balance=bool(getattr(settings, "ENFORCE_COMP_LEAVE_BALANCE", False))
        ),
        payroll_service=PayrollService(holder),
        audit_service=AuditService(holder),
        data_service=DataService(holder, storage, sync_manager),
    )
