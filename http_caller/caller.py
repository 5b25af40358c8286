"""
Synchronous HTTP caller: one request per call, logged, with token parameters
stripped from every URL that reaches the log.
"""

import logging
import time
from typing import Any, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import requests
from requests.structures import CaseInsensitiveDict
import structlog

from .config import CallerConfig
from .result import CallResult
from .sanitizer import remove_token_parameter, remove_token_values

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'

Headers = Union[Mapping[str, str], Iterable[Union[str, Tuple[str, str]]]]


class HttpCaller:
    def __init__(
        self,
        logger: Any = None,
        config: CallerConfig = None,
        session_factory=requests.Session
    ):
        """Initialize the caller with an injected logger and transport settings.

        Args:
            logger: Anything with debug/warning/error/log(level, msg), e.g. a
                    logging.Logger or a structlog logger. Defaults to a
                    structlog logger named "http_caller".
            config: Transport settings, CallerConfig() if omitted
            session_factory: Callable returning a fresh requests.Session-like
                    transport handle for every call
        """
        self.logger = logger if logger is not None else structlog.get_logger("http_caller")
        self.config = config or CallerConfig()
        self._session_factory = session_factory

    def get(
        self,
        url: str,
        parameters: Optional[Mapping[str, Any]] = None,
        additional_headers: Optional[Headers] = None,
        disable_call_result_debug_log: bool = False,
        log_level_for_status_code_404: Union[int, str] = logging.WARNING
    ) -> CallResult:
        """GET url, with parameters appended as a query string when non-empty.

        The parameters are appended with '?' even if url already carries a
        query string, so pass them inline in that case.
        """
        if parameters:
            url += '?' + _encode_parameters(parameters)

        self.logger.debug(f"calling GET: {remove_token_parameter(url)}")

        return self._call(
            'GET',
            url,
            None,
            additional_headers,
            disable_call_result_debug_log,
            log_level_for_status_code_404
        )

    def post(
        self,
        url: str,
        parameters: Union[Mapping[str, Any], str],
        additional_headers: Optional[Headers] = None,
        disable_call_result_debug_log: bool = False,
        log_level_for_status_code_404: Union[int, str] = logging.WARNING
    ) -> CallResult:
        """POST to url. A mapping is sent form-encoded, a string is sent verbatim."""
        self.logger.debug(f"calling POST: {remove_token_parameter(url)} with parameters {parameters!r}")

        if isinstance(parameters, (str, bytes)):
            body = parameters
        else:
            body = _encode_parameters(parameters)

        return self._call(
            'POST',
            url,
            body,
            additional_headers,
            disable_call_result_debug_log,
            log_level_for_status_code_404
        )

    def put(
        self,
        url: str,
        parameters: Mapping[str, Any],
        additional_headers: Optional[Headers] = None,
        disable_call_result_debug_log: bool = False,
        log_level_for_status_code_404: Union[int, str] = logging.WARNING
    ) -> CallResult:
        """PUT to url with parameters form-encoded into the body."""
        self.logger.debug(f"calling PUT: {remove_token_parameter(url)} with parameters {parameters!r}")

        return self._call(
            'PUT',
            url,
            _encode_parameters(parameters),
            additional_headers,
            disable_call_result_debug_log,
            log_level_for_status_code_404
        )

    def delete(
        self,
        url: str,
        additional_headers: Optional[Headers] = None,
        disable_call_result_debug_log: bool = False,
        log_level_for_status_code_404: Union[int, str] = logging.WARNING
    ) -> CallResult:
        self.logger.debug(f"calling DELETE: {remove_token_parameter(url)}")

        return self._call(
            'DELETE',
            url,
            None,
            additional_headers,
            disable_call_result_debug_log,
            log_level_for_status_code_404
        )

    def _call(
        self,
        method: str,
        url: str,
        body: Optional[Union[str, bytes]],
        additional_headers: Optional[Headers],
        disable_call_result_debug_log: bool,
        log_level_for_status_code_404: Union[int, str]
    ) -> CallResult:
        session = self._session_factory()
        try:
            self._configure_session(session, additional_headers)

            if body is not None:
                if 'Content-Type' not in session.headers:
                    session.headers['Content-Type'] = FORM_CONTENT_TYPE
                if isinstance(body, str):
                    body = body.encode('utf-8')

            return self._execute(
                session,
                method,
                url,
                body,
                disable_call_result_debug_log,
                log_level_for_status_code_404
            )
        finally:
            session.close()

    def _configure_session(self, session, additional_headers: Optional[Headers]):
        """Apply the transport options shared by every verb."""
        session.verify = self.config.verify_tls

        headers = _normalize_headers(additional_headers)
        if headers:
            session.headers.update(headers)

    def _execute(
        self,
        session,
        method: str,
        url: str,
        body: Optional[bytes],
        disable_call_result_debug_log: bool,
        log_level_for_status_code_404: Union[int, str]
    ) -> CallResult:
        level_404 = _log_level(log_level_for_status_code_404)
        log_url = remove_token_parameter(url)
        start_time = time.monotonic()

        result = None
        response_code = 0
        transport_error = None

        try:
            response = session.request(
                method,
                url,
                data=body,
                timeout=self.config.timeout,
                allow_redirects=self.config.follow_redirects,
                stream=False,
            )
            result = response.text
            response_code = int(response.status_code or 0)
        except requests.RequestException as e:
            transport_error = e

        call_duration = time.monotonic() - start_time

        self.logger.debug(f"callDuration: {call_duration!r} s for url: {log_url}")

        if transport_error is not None:
            message = remove_token_values(str(transport_error))
            self.logger.error(
                f"curl error ({type(transport_error).__name__}): {message} url: {log_url}"
            )

        if response_code >= 500:
            self.logger.error(f"curl call error: {response_code} url: {log_url}")
        elif response_code >= 300:
            if response_code == 404:
                self.logger.log(
                    level_404,
                    f"curl call: {response_code} url: {log_url}"
                )
            else:
                self.logger.warning(f"curl call warning: {response_code} url: {log_url}")

        if not disable_call_result_debug_log:
            self.logger.debug(f"result: ({response_code}) {result!r}")

        return CallResult(body=result, response_code=response_code)


def _encode_parameters(parameters: Mapping[str, Any]) -> str:
    """Form-encode parameters, sending booleans as 1/0."""
    return urlencode(
        [(key, _form_value(value)) for key, value in parameters.items()],
        doseq=True
    )


def _form_value(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_form_value(item) for item in value]
    return value


def _normalize_headers(additional_headers: Optional[Headers]) -> CaseInsensitiveDict:
    """Accept a mapping, (name, value) pairs or curl-style "Name: value" strings.

    Repeated names are joined into one comma-separated value.
    """
    headers = CaseInsensitiveDict()
    if not additional_headers:
        return headers

    if isinstance(additional_headers, Mapping):
        headers.update(additional_headers)
        return headers

    for header in additional_headers:
        if isinstance(header, str):
            name, _, value = header.partition(':')
            name, value = name.strip(), value.strip()
        else:
            name, value = header

        if name in headers:
            headers[name] = f"{headers[name]}, {value}"
        else:
            headers[name] = value
    return headers


def _log_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if isinstance(resolved, int):
            return resolved
        raise ValueError(f"Unknown log level: {level}")
    return level
