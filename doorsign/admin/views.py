from sqladmin import Admin, ModelView
from starlette.applications import Starlette

from doorsign.admin.auth import AdminAuth
from doorsign.status.models import StatusHistory
from doorsign.status_option.models import StatusOption
from doorsign.store.sql import SqlStatusStore
from doorsign.sync.models import SyncStatus
from doorsign.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"

    column_list = [
        User.username,
        User.role,
        User.first_name,
        User.last_name,
        User.epaper_id,
        User.current_status,
        User.custom_status_text,
        User.last_updated,
        User.created_at,
    ]
    column_searchable_list = [User.username, User.email, User.epaper_id]
    column_sortable_list = [User.username, User.role, User.last_updated]

    # Accounts need a hashed password, so they are created through the API.
    can_create = False
    # Status changes go through StatusService so history and the display
    # stay in step.
    form_excluded_columns = [
        User.password_hash,
        User.current_status,
        User.custom_status_text,
        User.last_updated,
        User.created_at,
        User.updated_at,
    ]
    column_details_exclude_list = [User.password_hash]


class StatusOptionAdmin(ModelView, model=StatusOption):
    name = "Status option"
    name_plural = "Status options"

    column_list = [StatusOption.name, StatusOption.color, StatusOption.sort_order]
    column_sortable_list = [StatusOption.name, StatusOption.sort_order]
    form_excluded_columns = [StatusOption.created_at, StatusOption.updated_at]


class StatusHistoryAdmin(ModelView, model=StatusHistory):
    name = "Status change"
    name_plural = "Status history"

    can_create = False
    can_edit = False
    can_delete = False
    column_list = [
        StatusHistory.user_id,
        StatusHistory.status,
        StatusHistory.custom_status_text,
        StatusHistory.changed_by,
        StatusHistory.changed_at,
    ]
    column_default_sort = [(StatusHistory.changed_at, True)]


class SyncStatusAdmin(ModelView, model=SyncStatus):
    name = "Sync run"
    name_plural = "Sync runs"

    can_create = False
    can_edit = False
    can_delete = False
    column_list = [
        SyncStatus.synced_at,
        SyncStatus.success,
        SyncStatus.updated_count,
        SyncStatus.error_message,
    ]
    column_default_sort = [(SyncStatus.synced_at, True)]


def mount_admin(app: Starlette, store: SqlStatusStore, secret_key: str) -> Admin:
    """Mount the back-office UI at /admin."""
    admin = Admin(
        app=app,
        engine=store.engine,
        authentication_backend=AdminAuth(store, secret_key),
    )
    for view in (UserAdmin, StatusOptionAdmin, StatusHistoryAdmin, SyncStatusAdmin):
        admin.add_view(view)
    return admin
