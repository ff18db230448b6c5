"""Unit tests for the cloudsm CLI."""

import json
from pathlib import Path

import pytest
import requests
from click.testing import CliRunner

from cloudsm_client import __version__
from cloudsm_client.cli.main import cli

OK_RESPONSE = (
    b"<r><responsetext>OK</responsetext><statuscode>0</statuscode>"
    b"<responsebean>{\"ticket_identifier\":\"12345\"}</responsebean></r>"
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, reset_logging):
    """Keep .env files and CLOUDSM_* variables out of CLI tests."""
    monkeypatch.setattr("cloudsm_client.config.manager.load_dotenv", lambda: False)
    for name in ("CLOUDSM_HOST_NAME", "CLOUDSM_USER_NAME", "CLOUDSM_LOG_LEVEL", "CLOUDSM_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path) -> Path:
    """Valid configuration file with console logging at WARNING."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "service": {
            "host_name": "sm1s.saas.ca.com",
            "user_name": "user@test.com",
            "response_format": "JSON",
        },
        "logging": {"level": "WARNING"},
    }), encoding="utf-8")
    return path


@pytest.fixture
def runner():
    """Click CLI runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, config_file, tmp_path):
    """Invoke the CLI with the test configuration and a stub transport."""

    def _invoke(args, transport=None, password="s3cr3t-pa55"):
        env = {"CLOUDSM_PASSWORD": password}
        base_args = ["--config", str(config_file), "--log-file", str(tmp_path / "cli.log")]
        return runner.invoke(cli, base_args + list(args), obj={"transport": transport}, env=env)

    return _invoke


class TestCLIBasics:
    """Test the command group and utility commands."""

    def test_help(self, runner):
        """Test --help lists the command groups."""
        # Act
        result = runner.invoke(cli, ["--help"])

        # Assert
        assert result.exit_code == 0
        for group in ("request", "worklog", "contacts", "config", "version"):
            assert group in result.output

    def test_version_command(self, invoke):
        """Test the version command prints the package version."""
        # Act
        result = invoke(["version"])

        # Assert
        assert result.exit_code == 0
        assert f"cloudsm version {__version__}" in result.output

    def test_invalid_config_file_exits_1(self, runner, tmp_path):
        """Test a malformed config file stops the CLI with exit code 1."""
        # Arrange
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")

        # Act
        result = runner.invoke(cli, ["--config", str(bad), "version"])

        # Assert
        assert result.exit_code == 1
        assert "Error loading configuration" in result.output


class TestConfigValidateCommand:
    """Test `cloudsm config validate`."""

    def test_valid_config(self, invoke, config_file):
        """Test a valid file is reported with its settings."""
        # Act
        result = invoke(["config", "validate", str(config_file)])

        # Assert
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "sm1s.saas.ca.com" in result.output
        assert "Response format: JSON" in result.output

    def test_invalid_config(self, invoke, tmp_path):
        """Test an invalid file fails validation with exit code 1."""
        # Arrange
        bad = tmp_path / "invalid.json"
        bad.write_text(json.dumps({"service": {"host_name": "https://x"}}), encoding="utf-8")

        # Act
        result = invoke(["config", "validate", str(bad)])

        # Assert
        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output


class TestRequestCommands:
    """Test `cloudsm request log` and `cloudsm request update`."""

    def test_log_request_sends_named_and_extra_fields(self, invoke, make_transport):
        """Test field options land in the srqBean."""
        # Arrange
        transport = make_transport(body=OK_RESPONSE)

        # Act
        result = invoke(
            [
                "request", "log",
                "--summary", "Printer offline",
                "--description", "Floor 3 printer",
                "--class", "Hardware",
                "--category", "Printer",
                "--requester", "jdoe",
                "--field", "ticket_priority=2",
            ],
            transport=transport,
        )

        # Assert
        assert result.exit_code == 0, result.output
        _, data, headers = transport.last_request
        body = data.decode("utf-8")
        assert headers["SOAPAction"] == "urn:logServiceRequest"
        assert "<xsd:ticket_description>Printer offline</xsd:ticket_description>" in body
        assert "<xsd:description_long>Floor 3 printer</xsd:description_long>" in body
        assert "<xsd:ccti_class>Hardware</xsd:ccti_class>" in body
        assert "<xsd:ccti_category>Printer</xsd:ccti_category>" in body
        assert "<xsd:requester_name>jdoe</xsd:requester_name>" in body
        assert "<xsd:ticket_priority>2</xsd:ticket_priority>" in body
        assert "<xsd:userPassword>s3cr3t-pa55</xsd:userPassword>" in body

    def test_log_request_prints_populated_fields(self, invoke, make_transport):
        """Test only non-empty result fields are printed."""
        # Act
        result = invoke(
            ["request", "log", "--summary", "x"],
            transport=make_transport(body=OK_RESPONSE),
        )

        # Assert
        assert result.exit_code == 0
        assert "Log service request" in result.output
        assert "response_text" in result.output
        assert "status_code" in result.output
        assert "warnings" not in result.output

    def test_json_output(self, invoke, make_transport):
        """Test --json prints the whole result as JSON."""
        # Act
        result = invoke(
            ["request", "log", "--summary", "x", "--json"],
            transport=make_transport(body=OK_RESPONSE),
        )

        # Assert
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["response_text"] == "OK"
        assert data["status_code"] == "0"
        assert data["response_bean"] == '{"ticket_identifier":"12345"}'
        assert data["errors"] == ""

    def test_update_request_sets_ticket_identifier(self, invoke, make_transport):
        """Test the ticket id argument becomes ticket_identifier."""
        # Arrange
        transport = make_transport(body=OK_RESPONSE)

        # Act
        result = invoke(
            ["request", "update", "12345", "--field", "ticket_status=Closed"],
            transport=transport,
        )

        # Assert
        assert result.exit_code == 0, result.output
        _, data, headers = transport.last_request
        body = data.decode("utf-8")
        assert headers["SOAPAction"] == "urn:updateServiceRequest"
        assert "<xsd:ticket_identifier>12345</xsd:ticket_identifier>" in body
        assert "<xsd:ticket_status>Closed</xsd:ticket_status>" in body
        assert "ticket_description" not in body

    def test_unknown_field_exits_1(self, invoke, make_transport):
        """Test an unknown --field name is a validation error."""
        # Arrange
        transport = make_transport(body=OK_RESPONSE)

        # Act
        result = invoke(["request", "log", "--field", "colour=blue"], transport=transport)

        # Assert
        assert result.exit_code == 1
        assert "colour" in result.output
        assert transport.calls == []

    def test_malformed_field_exits_1(self, invoke, make_transport):
        """Test a --field without '=' is a validation error."""
        # Act
        result = invoke(
            ["request", "log", "--field", "ticket_priority"],
            transport=make_transport(body=OK_RESPONSE),
        )

        # Assert
        assert result.exit_code == 1
        assert "NAME=VALUE" in result.output

    def test_business_errors_are_shown(self, invoke, make_transport):
        """Test service-reported errors are displayed but do not fail the command."""
        # Arrange
        transport = make_transport(body=b"<r><errors>Invalid requester</errors></r>")

        # Act
        result = invoke(["request", "log", "--requester", "ghost"], transport=transport)

        # Assert
        assert result.exit_code == 0
        assert "service reported errors" in result.output
        assert "Invalid requester" in result.output


class TestWorklogAndContactCommands:
    """Test `cloudsm worklog add` and `cloudsm contacts list`."""

    def test_worklog_add(self, invoke, make_transport):
        """Test a worklog is sent for the ticket."""
        # Arrange
        transport = make_transport(body=OK_RESPONSE)

        # Act
        result = invoke(
            ["worklog", "add", "12345", "--description", "Replaced toner"],
            transport=transport,
        )

        # Assert
        assert result.exit_code == 0, result.output
        url, data, _ = transport.last_request
        body = data.decode("utf-8")
        assert url.endswith("ServiceRequest.ServiceRequestHttpSoap12Endpoint/")
        assert "workglogBean" in body
        assert "<xsd:work_description>Replaced toner</xsd:work_description>" in body

    def test_worklog_add_requires_description(self, invoke, make_transport):
        """Test --description is mandatory."""
        # Act
        result = invoke(["worklog", "add", "12345"], transport=make_transport())

        # Assert
        assert result.exit_code == 2
        assert "--description" in result.output

    def test_contacts_list(self, invoke, make_transport):
        """Test contact search sends the search text."""
        # Arrange
        transport = make_transport(body=OK_RESPONSE)

        # Act
        result = invoke(["contacts", "list", "jdoe"], transport=transport)

        # Assert
        assert result.exit_code == 0, result.output
        _, data, headers = transport.last_request
        assert headers["Content-Type"] == "text/xml;charset=UTF-8"
        assert "<wrap:searchText>jdoe</wrap:searchText>" in data.decode("utf-8")


class TestExitCodes:
    """Test error handling exit codes."""

    def test_missing_password_exits_1(self, invoke, make_transport):
        """Test a missing CLOUDSM_PASSWORD is a configuration error."""
        # Arrange
        transport = make_transport(body=OK_RESPONSE)

        # Act
        result = invoke(["contacts", "list", "jdoe"], transport=transport, password=None)

        # Assert
        assert result.exit_code == 1
        assert "CLOUDSM_PASSWORD" in result.output
        assert transport.calls == []

    @pytest.mark.parametrize(
        "error",
        [
            requests.ConnectionError("refused"),
            requests.Timeout("timed out"),
            requests.HTTPError("500 Server Error"),
        ],
    )
    def test_transport_error_exits_2(self, invoke, make_transport, error):
        """Test transport failures exit with code 2."""
        # Act
        result = invoke(["contacts", "list", "jdoe"], transport=make_transport(error=error))

        # Assert
        assert result.exit_code == 2
        assert "Transport Error" in result.output

    def test_unparseable_response_exits_3(self, invoke, make_transport):
        """Test a malformed response exits with code 3."""
        # Act
        result = invoke(
            ["contacts", "list", "jdoe"],
            transport=make_transport(body=b"<html>Service Unavailable"),
        )

        # Assert
        assert result.exit_code == 3
        assert "not well-formed XML" in result.output
