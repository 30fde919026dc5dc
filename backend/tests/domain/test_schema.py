import pytest
from pydantic import ValidationError

from app.contracts.metadata import required_fields
from app.domain.schema import GreetingRequest, GreetingResponse


class TestSchema:
    def test_greeting_request_by_alias(self):
        req = GreetingRequest.model_validate({"Name": "Ada"})
        assert req.name == "Ada"

    def test_greeting_request_by_field_name(self):
        req = GreetingRequest(name="Ada")
        assert req.name == "Ada"

    def test_greeting_request_binds_missing_name_as_none(self):
        req = GreetingRequest.model_validate({})
        assert req.name is None

    def test_greeting_request_rejects_wrong_type(self):
        with pytest.raises(ValidationError):
            GreetingRequest.model_validate({"Name": ["Ada"]})

    def test_greeting_response_dumps_pascal_case(self):
        resp = GreetingResponse(greeting="HELLO ADA")
        assert resp.model_dump(by_alias=True) == {"Greeting": "HELLO ADA"}

    def test_mandatory_fields(self):
        assert required_fields(GreetingRequest) == {"name"}
        assert required_fields(GreetingResponse) == {"greeting"}

    def test_json_schema_is_annotated(self):
        schema = GreetingRequest.model_json_schema()

        assert schema["required"] == ["Name"]
        assert schema["properties"]["Name"] == {"title": "Name", "type": "string"}
