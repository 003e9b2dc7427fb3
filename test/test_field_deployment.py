import pytest

from sffields.services.field_deployment import as_list, deploy_fields, join_error_messages

from conftest import FakeMetadataConnection, make_field


def test_single_batch_create_call(fake_connection):
    fields = [make_field(fieldApiName="A"), make_field(fieldApiName="B__c")]

    result = deploy_fields(fake_connection, fields)

    assert len(fake_connection.create_calls) == 1
    metadata_type, items = fake_connection.create_calls[0]
    assert metadata_type == "CustomField"
    assert [i["fullName"] for i in items] == ["Account.A__c", "Account.B__c"]
    assert result.success_fields == ["Account.A__c", "Account.B__c"]
    assert result.failed_fields == []


def test_partitions_by_returned_order_and_full_name():
    connection = FakeMetadataConnection(create_response=[
        {"fullName": "Account.C__c", "success": True},
        {"fullName": "Account.A__c", "success": False, "errors": [
            {"message": "Duplicate name"}, {"message": "Try another"},
        ]},
        {"fullName": "Account.B__c", "success": True},
    ])
    fields = [make_field(fieldApiName=n) for n in ("A", "B", "C")]

    result = deploy_fields(connection, fields)

    assert result.success_fields == ["Account.C__c", "Account.B__c"]
    assert result.failed_fields == ["Account.A__c: Duplicate name, Try another"]


def test_single_outcome_and_single_error_are_normalized():
    connection = FakeMetadataConnection(create_response={
        "fullName": "Account.A__c",
        "success": False,
        "errors": {"message": "Field type not allowed"},
    })

    result = deploy_fields(connection, [make_field(fieldApiName="A")])

    assert result.failed_fields == ["Account.A__c: Field type not allowed"]


def test_transport_error_propagates():
    connection = FakeMetadataConnection(create_response=ConnectionError("socket closed"))

    with pytest.raises(ConnectionError):
        deploy_fields(connection, [make_field()])


def test_as_list():
    assert as_list(None) == []
    assert as_list({"a": 1}) == [{"a": 1}]
    assert as_list([1, 2]) == [1, 2]


def test_join_error_messages_without_messages():
    assert join_error_messages({"success": False}) == "Unknown error"
    assert join_error_messages({"errors": [None, {"message": "x"}]}) == "x"


def test_empty_create_result_fails_every_submitted_field():
    connection = FakeMetadataConnection(create_response=[])
    fields = [make_field(fieldApiName="A"), make_field(fieldApiName="B")]

    result = deploy_fields(connection, fields)

    assert result.success_fields == []
    assert result.failed_fields == [
        "Account.A__c: No result returned",
        "Account.B__c: No result returned",
    ]


def test_short_create_result_fails_only_the_missing_field():
    connection = FakeMetadataConnection(create_response=[
        {"fullName": "Account.B__c", "success": True},
    ])
    fields = [make_field(fieldApiName="A"), make_field(fieldApiName="B")]

    result = deploy_fields(connection, fields)

    assert result.success_fields == ["Account.B__c"]
    assert result.failed_fields == ["Account.A__c: No result returned"]
