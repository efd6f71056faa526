# coding: utf-8
""""""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from coreend.io.exceptions import (
    TransportError,
    ValidationError,
    raise_for_status,
    transport_error_from,
)

logger = logging.getLogger(__name__)


class _Api:
    """
    CoreEnd API connection bound to one project's base URL.

    All requests go through a single shared :class:`httpx.AsyncClient`. Each
    call is one attempt: failures are raised as :class:`TransportError` and
    never retried.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._transport = transport

        # httpx client
        self._async_httpx_client: Optional[httpx.AsyncClient] = None

    @property
    def api_server_address(self) -> str:
        """
        Get API base URL.

        :return: API base URL.
        :rtype: :class:`str`
        :Usage example:

         .. code-block:: python

            import coreend

            api = coreend.Api(project_id=42)
            print(api.api_server_address)
            # Output:
            # 'https://api.coreend.tech/v1/projects/42/'
        """
        return self._base_url

    async def request(
        self,
        method_type: str,
        method: str,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Performs a single request to the server.

        :param method_type: HTTP verb ('GET', 'POST', 'PUT' or 'DELETE').
        :type method_type: str
        :param method: Path relative to the project base URL.
        :type method: str
        :param json: Body to send as JSON.
        :type json: any, optional
        :param params: URL query parameters.
        :type params: dict, optional
        :param data: Form fields, sent with ``files`` as multipart.
        :type data: dict, optional
        :param files: Files to send in the body of request.
        :type files: dict, optional
        :param headers: Custom headers to include in the request.
        :type headers: dict, optional
        :return: Response object
        :rtype: :class:`httpx.Response`
        :raises TransportError: if the request can not be built or sent, or the status is not 2xx.
        """
        self._set_async_client()

        url = self._prepare_url(method)
        logger.info(f"{method_type} {url}")

        try:
            response = await self._async_httpx_client.request(
                method_type,
                url,
                json=json,
                params=params,
                data=data,
                files=files,
                headers=headers,
            )
        except Exception as exc:
            # unencodable body, invalid url or network failure
            logger.warning(f"{method_type} {url} failed: {exc!r}")
            raise transport_error_from(exc, method_type, url) from exc

        try:
            raise_for_status(response)
        except TransportError as exc:
            logger.warning(str(exc))
            raise
        return response

    async def get(self, method: str, params: Optional[Mapping[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self.request("GET", method, params=params, headers=headers)

    async def post(
        self,
        method: str,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request(
            "POST", method, json=json, params=params, data=data, files=files, headers=headers
        )

    async def put(self, method: str, json: Any = None, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self.request("PUT", method, json=json, headers=headers)

    async def delete(self, method: str, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self.request("DELETE", method, headers=headers)

    @staticmethod
    def parse_json(response: httpx.Response) -> Any:
        """
        Decode the JSON body of a response. An empty body decodes to ``None``.

        :raises ValidationError: if the body is not valid JSON.
        """
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ValidationError(f"Could not decode response from {response.url}: {e}") from e

    def _prepare_url(self, method: str) -> str:
        """
        Prepares the API endpoint URL.
        """
        return f"{self._base_url}{method.lstrip('/')}"

    def _set_async_client(self):
        """
        Set async httpx client if it is not set yet.
        """
        if self._async_httpx_client is None:
            self._async_httpx_client = httpx.AsyncClient(transport=self._transport)

    async def aclose(self) -> None:
        if self._async_httpx_client is not None:
            await self._async_httpx_client.aclose()
            self._async_httpx_client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
