"""Tests for doorsign/admin/views.py - back-office view permissions."""

import pytest
from fastapi import FastAPI

from doorsign.admin.views import (
    StatusHistoryAdmin,
    StatusOptionAdmin,
    SyncStatusAdmin,
    UserAdmin,
    mount_admin,
)


@pytest.mark.parametrize("view", [StatusHistoryAdmin, SyncStatusAdmin])
def test_log_views_are_read_only(view):
    assert view.can_create is False
    assert view.can_edit is False
    assert view.can_delete is False


def test_user_form_cannot_change_status():
    excluded = {column.key for column in UserAdmin.form_excluded_columns}

    assert {
        "current_status",
        "custom_status_text",
        "last_updated",
        "password_hash",
    } <= excluded


def test_users_are_not_created_from_back_office():
    assert UserAdmin.can_create is False
    assert UserAdmin.can_edit is True


def test_status_options_are_editable():
    assert StatusOptionAdmin.can_create is True
    assert StatusOptionAdmin.can_delete is True


def test_mount_admin_registers_views(sql_store):
    admin = mount_admin(FastAPI(), sql_store, "test-secret-key")

    assert {type(view) for view in admin.views} == {
        UserAdmin,
        StatusOptionAdmin,
        StatusHistoryAdmin,
        SyncStatusAdmin,
    }
