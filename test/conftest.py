import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sffields.models import FieldDefinition, PermissionAssignment


class FakeMetadataConnection:
    """Records create/update calls and replays scripted responses.

    ``create_response`` is returned (or raised, if an exception) from create.
    ``update_responses`` maps a metadata type to a list of responses consumed
    in order; an exception instance in the list is raised instead.
    """

    def __init__(self, create_response=None, update_responses=None):
        self.create_response = create_response
        self.update_responses = {k: list(v) for k, v in (update_responses or {}).items()}
        self.create_calls = []
        self.update_calls = []

    def create(self, metadata_type, items):
        self.create_calls.append((metadata_type, items))
        if isinstance(self.create_response, Exception):
            raise self.create_response
        if self.create_response is None:
            return [{"fullName": item["fullName"], "success": True, "errors": []} for item in items]
        return self.create_response

    def update(self, metadata_type, item):
        self.update_calls.append((metadata_type, item))
        queue = self.update_responses.get(metadata_type) or [{"fullName": item["fullName"], "success": True}]
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response


def make_field(**overrides):
    data = {
        "objectApiName": "Account",
        "fieldApiName": "Region",
        "label": "Region",
        "type": "Text",
    }
    data.update(overrides)
    return FieldDefinition.model_validate(data)


def make_permission(name="SalesTeam", readable=True, editable=False):
    return PermissionAssignment.model_validate(
        {"permissionSetOrProfile": name, "readable": readable, "editable": editable}
    )


@pytest.fixture
def fake_connection():
    return FakeMetadataConnection()
