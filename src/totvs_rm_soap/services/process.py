"""
Process service wrapper (``wsProcess``).

Runs RM server processes and polls their execution status.
"""

from __future__ import annotations

__all__ = ["ProcessService"]

import logging

from ..constants import PROCESS_WSDL_PATH
from .base import BaseService

_logger = logging.getLogger(__name__)


class ProcessService(BaseService):
    """Client for the RM process server.

    Example::

        config = load_config()
        process = ProcessService(WebService(config))
        job_id = process.execute_with_xml_params("FinLanBaixaData", xml)
    """

    wsdl_path = PROCESS_WSDL_PATH

    def execute_with_xml_params(self, process_name: str, xml_params: str) -> int:
        """
        Execute a process with its parameters as an XML document.

        Args:
            process_name: Process server name, e.g. ``FinLanBaixaData``.
            xml_params: Serialized process parameters.

        Returns:
            The integer result returned by the server (usually the job id).

        Raises:
            RemoteCallError: If the call failed.
            MalformedResponseError: If the result is not an integer.
        """
        _logger.info("Executing process %s (XML params)", process_name)
        return self._call_int(
            "ExecuteWithXmlParams",
            ProcessServerName=process_name,
            strXmlParams=xml_params,
        )

    def execute_with_params(self, process_name: str, xml_params: str) -> int:
        """Execute a process through ``ExecuteWithParams``.

        Same arguments and errors as :meth:`execute_with_xml_params`.
        """
        _logger.info("Executing process %s", process_name)
        return self._call_int(
            "ExecuteWithParams",
            ProcessServerName=process_name,
            strXmlParams=xml_params,
        )

    def get_process_status(self, job_id: int, exec_id: int) -> int:
        """Return the status code of a process execution."""
        return self._call_int("GetProcessStatus", jobId=job_id, execId=exec_id)
