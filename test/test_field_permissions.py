import pytest

from sffields.services.field_permissions import (
    GRANTEE_KINDS,
    GranteeKind,
    apply_with_fallback,
    assign_field_permissions,
    build_field_permissions,
)

from conftest import FakeMetadataConnection, make_permission

FIELDS = ["Account.Region__c", "Account.Code__c"]


def test_build_field_permissions_same_flags_for_every_field():
    assert build_field_permissions(FIELDS, True, False) == [
        {"field": "Account.Region__c", "readable": True, "editable": False},
        {"field": "Account.Code__c", "readable": True, "editable": False},
    ]


def test_fallback_not_taken_on_success():
    calls = []

    def attempt(kind):
        calls.append(kind)
        return {"success": True}

    grant = apply_with_fallback(GRANTEE_KINDS, attempt)

    assert grant.kind is GranteeKind.PERMISSION_SET
    assert calls == [GranteeKind.PERMISSION_SET]


@pytest.mark.parametrize("first", [RuntimeError("boom"), {"success": False, "errors": [{"message": "no"}]}])
def test_fallback_taken_on_exception_or_declared_failure(first):
    calls = []

    def attempt(kind):
        calls.append(kind)
        if kind is GranteeKind.PERMISSION_SET:
            if isinstance(first, Exception):
                raise first
            return first
        return {"success": True}

    grant = apply_with_fallback(GRANTEE_KINDS, attempt)

    assert grant.kind is GranteeKind.PROFILE
    assert grant.outcome == {"success": True}
    assert calls == [GranteeKind.PERMISSION_SET, GranteeKind.PROFILE]


def test_permission_set_success():
    connection = FakeMetadataConnection()

    report = assign_field_permissions(connection, FIELDS, [make_permission(editable=True)])

    assert report == '✓ Permission Set "SalesTeam": assigned'
    metadata_type, item = connection.update_calls[0]
    assert metadata_type == "PermissionSet"
    assert item["fullName"] == "SalesTeam"
    assert [p["field"] for p in item["fieldPermissions"]] == FIELDS
    assert all(p["editable"] for p in item["fieldPermissions"])


def test_permission_set_raises_then_profile_succeeds():
    connection = FakeMetadataConnection(update_responses={
        "PermissionSet": [ConnectionError("INVALID_CROSS_REFERENCE_KEY")],
        "Profile": [[{"fullName": "SalesTeam", "success": True}]],
    })

    report = assign_field_permissions(connection, FIELDS, [make_permission()])

    assert report == '✓ Profile "SalesTeam": assigned'
    assert [c[0] for c in connection.update_calls] == ["PermissionSet", "Profile"]
    assert connection.update_calls[0][1] == connection.update_calls[1][1]


def test_permission_set_raises_and_profile_fails():
    connection = FakeMetadataConnection(update_responses={
        "PermissionSet": [ConnectionError("boom")],
        "Profile": [{"fullName": "SalesTeam", "success": False, "errors": [
            {"message": "no such profile"}, {"message": "check the name"},
        ]}],
    })

    report = assign_field_permissions(connection, FIELDS, [make_permission()])

    assert report == '✗ "SalesTeam": no such profile, check the name'


def test_declared_failure_falls_back_to_profile():
    connection = FakeMetadataConnection(update_responses={
        "PermissionSet": [{"fullName": "Sales", "success": False, "errors": {"message": "not a permission set"}}],
        "Profile": [{"fullName": "Sales", "success": True}],
    })

    report = assign_field_permissions(connection, FIELDS, [make_permission("Sales")])

    assert report == '✓ Profile "Sales": assigned'


def test_unexpected_error_is_isolated_per_grantee():
    connection = FakeMetadataConnection(update_responses={
        "PermissionSet": [
            ConnectionError("down"),
            {"fullName": "Second", "success": True},
        ],
        "Profile": [ValueError("profile service unavailable")],
    })

    report = assign_field_permissions(
        connection, FIELDS, [make_permission("First"), make_permission("Second")]
    )

    assert report.split("\n") == [
        '✗ "First": profile service unavailable',
        '✓ Permission Set "Second": assigned',
    ]


def test_empty_update_result_counts_as_failure():
    connection = FakeMetadataConnection(update_responses={"PermissionSet": [[]], "Profile": [[]]})

    report = assign_field_permissions(connection, FIELDS, [make_permission()])

    assert report == '✗ "SalesTeam": No result returned'


def test_exception_without_message_reports_its_type():
    connection = FakeMetadataConnection(update_responses={
        "PermissionSet": [ConnectionError()],
        "Profile": [TimeoutError()],
    })

    report = assign_field_permissions(connection, FIELDS, [make_permission()])

    assert report == '✗ "SalesTeam": TimeoutError'
