"""DevCycle adapter – HttpDevCycleClient over the bucketing API."""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx

from devcycle_openfeature.application.devcycle.options import DevCycleOptions
from devcycle_openfeature.application.devcycle.user import DevCycleUser
from devcycle_openfeature.application.devcycle.variable import EvalReason, Variable
from devcycle_openfeature.kernel.errors import ExternalServiceError, ParseError
from devcycle_openfeature.kernel.errors import TimeoutError as DevCycleTimeoutError
from devcycle_openfeature.observability.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

VARIABLES_PATH = "/v1/variables"
SERVICE_NAME = "devcycle"


def _variable_type(value: Any) -> str | None:
    """DevCycle variable type name for a Python value."""
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, str):
        return "String"
    if isinstance(value, (int, float)):
        return "Number"
    if isinstance(value, Mapping):
        return "JSON"
    return None


def _parse_eval(raw: Any) -> EvalReason | None:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("reason"), str):
        return None
    details = raw.get("details")
    target_id = raw.get("target_id")
    return EvalReason(
        reason=raw["reason"],
        details=details if isinstance(details, str) else None,
        target_id=target_id if isinstance(target_id, str) else None,
    )


class HttpDevCycleClient:
    """DevCycle client holding the variables fetched for the current user.

    :meth:`variable` resolves from the cached variable map and never performs
    I/O; :meth:`identify_user` refetches for a new user and swaps user and
    cache only on success.
    """

    def __init__(
        self,
        sdk_key: str,
        user: DevCycleUser,
        options: DevCycleOptions,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._sdk_key = sdk_key
        self._user = user
        self._options = options
        self._http = http_client or httpx.AsyncClient(
            base_url=options.base_url, timeout=options.timeout
        )
        self._variables: dict[str, dict[str, Any]] = {}

    async def __aenter__(self) -> HttpDevCycleClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def user(self) -> DevCycleUser:
        return self._user

    async def start(self) -> None:
        """Fetch the initial configuration for the construction-time user."""
        self._variables = await self._fetch(self._user)

    def variable(self, key: str, default_value: T) -> Variable[T]:
        raw = self._variables.get(key)
        if raw is None:
            return Variable.defaulted(key, default_value)

        value = raw.get("value")
        expected = _variable_type(default_value)
        declared = raw.get("type") or _variable_type(value)
        if expected is None or declared != expected or _variable_type(value) != expected:
            logger.warning(
                "devcycle.variable.type_mismatch",
                key=key,
                expected=expected,
                received=declared,
            )
            return Variable.defaulted(key, default_value)

        if expected == "Number":
            try:
                value = float(value)
            except OverflowError:
                value = math.inf
            if not math.isfinite(value):
                logger.warning("devcycle.variable.non_finite_number", key=key, value=repr(value))
                return Variable.defaulted(key, default_value)
        return Variable(
            key=key,
            value=value,
            default_value=default_value,
            is_defaulted=False,
            eval=_parse_eval(raw.get("eval")),
        )

    async def identify_user(self, user: DevCycleUser) -> dict[str, Variable[Any]]:
        variables = await self._fetch(user)
        self._user = user
        self._variables = variables
        return {
            key: Variable(
                key=key,
                value=raw.get("value"),
                default_value=raw.get("value"),
                is_defaulted=False,
                eval=_parse_eval(raw.get("eval")),
            )
            for key, raw in variables.items()
        }

    async def close(self) -> None:
        await self._http.aclose()

    async def _fetch(self, user: DevCycleUser) -> dict[str, dict[str, Any]]:
        try:
            response = await self._http.post(
                VARIABLES_PATH,
                json=user.to_payload(),
                headers={"Authorization": self._sdk_key},
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise DevCycleTimeoutError(f"DevCycle request timed out: POST {VARIABLES_PATH}") from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                service=SERVICE_NAME,
                message=f"HTTP {exc.response.status_code} from POST {VARIABLES_PATH}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=SERVICE_NAME, message=str(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ParseError("DevCycle returned a non-JSON body", cause=exc) from exc
        if not isinstance(body, dict):
            raise ParseError(
                "DevCycle returned an unexpected payload",
                detail={"payload_type": type(body).__name__},
            )
        logger.debug("devcycle.variables.fetched", user_id=user.user_id, count=len(body))
        return {key: raw for key, raw in body.items() if isinstance(raw, dict)}


class HttpDevCycleClientFactory:
    """Build and start :class:`HttpDevCycleClient` instances.

    *transport* is handed to ``httpx.AsyncClient`` (e.g. ``httpx.MockTransport``).
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def build(
        self,
        sdk_key: str,
        user: DevCycleUser,
        options: DevCycleOptions,
    ) -> HttpDevCycleClient:
        http_client = httpx.AsyncClient(
            base_url=options.base_url,
            timeout=options.timeout,
            transport=self._transport,
        )
        client = HttpDevCycleClient(sdk_key, user, options, http_client=http_client)
        try:
            await client.start()
        except BaseException:
            await client.close()
            raise
        return client


__all__ = ["HttpDevCycleClient", "HttpDevCycleClientFactory"]
