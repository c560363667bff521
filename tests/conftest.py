"""Shared test fixtures for the totvs-rm-soap test suite."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from totvs_rm_soap.config import ConnectionConfig

# GetReportList result captured from an RM 12.1 server (trimmed to two reports).
REPORT_LIST_RAW = (
    's:7625:"1,F,12,FIN.001,Extrato de lançamentos,2024-03-01,6f1c2a9e-0b7d-4d7e-9a51-3c2f0e1b2a10;,'
    "1,G,40,GER.010,Ficha, cadastral, completa,2023-11-20,0d4b8f7e-9c1a-4f11-8e2b-5a6c7d8e9f00;,"
    '"'
)


@pytest.fixture
def config():
    """Connection config with secure TLS defaults."""
    return ConnectionConfig(
        base_url="https://rm.example.com:8051",
        username="mestre",
        password="totvs",
    )


@pytest.fixture
def mock_client():
    """Stand-in for a bound zeep ServiceProxy."""
    return Mock()


@pytest.fixture
def mock_web_service(mock_client):
    """Connection factory whose get_client returns ``mock_client``."""
    from totvs_rm_soap.network import WebService

    web_service = Mock(spec=WebService)
    web_service.get_client.return_value = mock_client
    return web_service
