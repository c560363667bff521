"""Tests for totvs_rm_soap.network.connection -- WSDL loading and SOAP 1.1 binding."""

from dataclasses import replace
from unittest.mock import Mock, patch

import pytest
import requests
from zeep.exceptions import TransportError, XMLSyntaxError
from zeep.wsdl.bindings.soap import Soap11Binding, Soap12Binding

from totvs_rm_soap.constants import PROCESS_WSDL_PATH, REPORT_WSDL_PATH
from totvs_rm_soap.errors import ServiceConnectionError
from totvs_rm_soap.network import WebService


def _port(name, binding_cls):
    port = Mock()
    port.name = name
    port.binding = Mock(spec=binding_cls)
    return port


def _zeep_client(*ports):
    """Mock zeep Client exposing one service with the given ports."""
    service = Mock()
    service.name = "wsReport"
    service.ports = {port.name: port for port in ports}
    client = Mock()
    client.wsdl.services = {"wsReport": service}
    return client


def test_get_client_builds_wsdl_url(config):
    client = _zeep_client(_port("RM_IwsReport", Soap11Binding))
    with patch("totvs_rm_soap.network.connection.Client", return_value=client) as mock_cls:
        WebService(config).get_client(REPORT_WSDL_PATH)

    assert mock_cls.call_args.kwargs["wsdl"] == "https://rm.example.com:8051/wsReport/MEX?wsdl"


def test_get_client_passes_authenticated_transport(config):
    client = _zeep_client(_port("RM_IwsProcess", Soap11Binding))
    with patch("totvs_rm_soap.network.connection.Client", return_value=client) as mock_cls:
        WebService(config).get_client(PROCESS_WSDL_PATH)

    zeep_transport = mock_cls.call_args.kwargs["transport"]
    assert zeep_transport.session.auth.username == "mestre"
    assert zeep_transport.operation_timeout == config.timeout


def test_get_client_binds_soap11_port(config):
    """SOAP 1.2 ports are skipped in favour of the SOAP 1.1 port."""
    client = _zeep_client(
        _port("RM_IwsReport12", Soap12Binding),
        _port("RM_IwsReport", Soap11Binding),
    )
    with patch("totvs_rm_soap.network.connection.Client", return_value=client):
        service = WebService(config).get_client(REPORT_WSDL_PATH)

    client.bind.assert_called_once_with("wsReport", "RM_IwsReport")
    assert service is client.bind.return_value


def test_get_client_no_soap11_port(config):
    client = _zeep_client(_port("RM_IwsReport12", Soap12Binding))
    with (
        patch("totvs_rm_soap.network.connection.Client", return_value=client),
        pytest.raises(ServiceConnectionError, match="SOAP 1.1") as exc_info,
    ):
        WebService(config).get_client(REPORT_WSDL_PATH)

    assert exc_info.value.url.endswith(REPORT_WSDL_PATH)


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.ConnectionError("connection refused"),
        requests.exceptions.SSLError("certificate verify failed"),
        TransportError("Server returned HTTP status 401", status_code=401),
        XMLSyntaxError("Invalid XML content received"),
    ],
    ids=["refused", "ssl", "http_401", "bad_wsdl"],
)
def test_get_client_failure_raises_chained(config, error, caplog):
    with (
        patch("totvs_rm_soap.network.connection.Client", side_effect=error),
        pytest.raises(ServiceConnectionError) as exc_info,
    ):
        WebService(config).get_client(PROCESS_WSDL_PATH)

    assert exc_info.value.__cause__ is error
    assert exc_info.value.url == "https://rm.example.com:8051/wsProcess/MEX?wsdl"
    assert "https://rm.example.com:8051/wsProcess/MEX?wsdl" in caplog.text


def test_get_client_does_not_log_password(config, caplog):
    config = replace(config, password="s3cr3t-pw")
    with (
        patch(
            "totvs_rm_soap.network.connection.Client",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ),
        pytest.raises(ServiceConnectionError),
    ):
        WebService(config).get_client(PROCESS_WSDL_PATH)

    assert "s3cr3t-pw" not in caplog.text
