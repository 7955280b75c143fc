#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import asyncio
import configparser
import logging
import os
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any, ClassVar, Final, Literal

from .endpoints import DEFAULT_CLOUDFRONT_HOST
from .interfaces import HTTPClient, RetryStrategy

logger: Final = logging.getLogger(__name__)

SOURCE_CONSTRUCTOR = "constructor"
SOURCE_ENVIRONMENT = "environment"
SOURCE_CREDENTIALS_FILE = "credentials_file"
SOURCE_DEFAULT = "default"
SOURCE_IN_CODE_UPDATE = "in_code_update"

SourceType = Literal[
    "constructor",
    "environment",
    "credentials_file",
    "default",
    "in_code_update",
]

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


class ConfigValue:
    """Configuration value with metadata about its source"""

    def __init__(self, value: Any, source: SourceType):
        self.value = value
        self.source = source

    def __repr__(self) -> str:
        return f"ConfigValue({self.value!r}, source={self.source!r})"


class CloudFrontConfig:
    """
    CloudFront client configuration with precedence-based resolution.

    Values are resolved, highest precedence first, from the constructor, from
    environment variables, from the active profile of ``~/.aws/credentials`` and
    finally from defaults. The sentinel value (...) distinguishes "not provided" from
    "explicitly set to None".

    Options:

    ``aws_access_key_id``, ``aws_secret_access_key``, ``aws_session_token``
        Credentials used to sign requests.
    ``cloudfront_host``
        Host serving the API. Defaults to ``cloudfront.amazonaws.com``.
    ``retry``
        Retry failed requests with exponential backoff. Defaults to off.
    ``fatal``
        Raise :py:class:`CloudFrontServiceError` when an operation fails. When off,
        operations return ``None`` and the error is kept on the client. Defaults to on.
    ``timeout``
        Timeout in seconds for HTTP requests. Defaults to 30.
    ``date``
        A fixed RFC-1123 date to sign every request with. Defaults to the current time
        of each request.
    ``proxy``
        URL of an HTTP proxy.
    ``retry_strategy``
        Strategy used when ``retry`` is on.
    ``http_client``
        Transport used to send requests. Defaults to an aiohttp client.
    """

    CONFIG_FIELDS: ClassVar[dict[str, dict[str, Any]]] = {
        "aws_access_key_id": {
            "env_var": "AWS_ACCESS_KEY_ID",
            "config_key": "aws_access_key_id",
            "default": None,
            "type": str | None,
        },
        "aws_secret_access_key": {
            "env_var": "AWS_SECRET_ACCESS_KEY",
            "config_key": "aws_secret_access_key",
            "default": None,
            "type": str | None,
        },
        "aws_session_token": {
            "env_var": "AWS_SESSION_TOKEN",
            "config_key": "aws_session_token",
            "default": None,
            "type": str | None,
        },
        "cloudfront_host": {
            "env_var": "AWS_CLOUDFRONT_HOST",
            "default": DEFAULT_CLOUDFRONT_HOST,
            "type": str,
        },
        "retry": {
            "env_var": "AWS_CLOUDFRONT_RETRY",
            "default": False,
            "type": bool,
            "parser": "_parse_bool",
        },
        "fatal": {
            "env_var": "AWS_CLOUDFRONT_FATAL",
            "default": True,
            "type": bool,
            "parser": "_parse_bool",
        },
        "timeout": {
            "env_var": "AWS_CLOUDFRONT_TIMEOUT",
            "default": 30.0,
            "type": int | float | None,
            "parser": "_parse_float",
        },
        "date": {
            "default": None,
            "type": str | None,
        },
        "proxy": {
            "default": None,
            "type": str | None,
        },
        "retry_strategy": {
            "default": None,
            "type": RetryStrategy | None,
        },
        "http_client": {
            "default": None,
            "type": HTTPClient | None,
        },
    }

    def __init__(
        self,
        *,
        aws_access_key_id: str | None = ...,  # type: ignore[assignment]
        aws_secret_access_key: str | None = ...,  # type: ignore[assignment]
        aws_session_token: str | None = ...,  # type: ignore[assignment]
        cloudfront_host: str = ...,  # type: ignore[assignment]
        retry: bool = ...,  # type: ignore[assignment]
        fatal: bool = ...,  # type: ignore[assignment]
        timeout: float | None = ...,  # type: ignore[assignment]
        date: str | None = ...,  # type: ignore[assignment]
        proxy: str | None = ...,  # type: ignore[assignment]
        retry_strategy: RetryStrategy | None = ...,  # type: ignore[assignment]
        http_client: HTTPClient | None = ...,  # type: ignore[assignment]
    ):
        self._constructor_values = {
            k: v for k, v in locals().items() if k != "self" and v is not ...
        }
        unknown = set(self._constructor_values) - set(self.CONFIG_FIELDS)
        if unknown:
            raise TypeError(f"Unknown config fields: {', '.join(sorted(unknown))}")
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    async def resolve(
        self,
        *,
        environment_loader: Callable[[], Awaitable[Mapping[str, Any]]] | None = None,
        credentials_file_loader: Callable[[], Awaitable[dict[str, Any]]] | None = None,
    ) -> None:
        """Resolve configuration from all sources

        Args:
            environment_loader: Custom environment loader function
            credentials_file_loader: Custom credentials file loader function
        """
        if self._resolved:
            raise RuntimeError(
                "Config has already been resolved. Multiple calls to resolve() are not allowed."
            )

        env_values, credentials_file_values = await asyncio.gather(
            (environment_loader or self._load_environment_values)(),
            (credentials_file_loader or self._load_credentials_file_values)(),
        )

        for field_name in self.CONFIG_FIELDS:
            # Values assigned through a setter before resolution take precedence.
            current = self.__dict__.get(f"_{field_name}")
            if current is not None and current.source == SOURCE_IN_CODE_UPDATE:
                continue
            resolved_value = self._resolve_field(
                field_name,
                self._constructor_values,
                env_values,
                credentials_file_values,
            )
            logger.debug(
                "Resolved config field %s from %s.", field_name, resolved_value.source
            )
            setattr(self, f"_{field_name}", resolved_value)

        self._resolved = True

    async def _load_environment_values(self) -> Mapping[str, str]:
        return os.environ

    async def _load_credentials_file_values(self) -> dict[str, Any]:
        def _read_credentials() -> dict[str, str]:
            credentials_path = Path(
                os.environ.get(
                    "AWS_SHARED_CREDENTIALS_FILE",
                    Path.home() / ".aws" / "credentials",
                )
            )
            if not credentials_path.exists():
                return {}

            parser = configparser.ConfigParser()
            parser.read(credentials_path)

            profile = os.environ.get("AWS_PROFILE", "default")

            if profile not in parser:
                return {}

            return dict(parser[profile])

        return await asyncio.to_thread(_read_credentials)

    def _resolve_field(
        self,
        field_name: str,
        constructor_values: dict[str, Any],
        env_values: Mapping[str, Any],
        credentials_file_values: dict[str, Any],
    ) -> ConfigValue:
        field_config = self.CONFIG_FIELDS[field_name]
        env_var = field_config.get("env_var")
        config_key = field_config.get("config_key")
        parser = field_config.get("parser")

        if field_name in constructor_values:
            value = constructor_values[field_name]
            source = SOURCE_CONSTRUCTOR
        elif env_var and env_var in env_values:
            value = env_values[env_var]
            source = SOURCE_ENVIRONMENT
        elif config_key and config_key in credentials_file_values:
            value = credentials_file_values[config_key]
            source = SOURCE_CREDENTIALS_FILE
        else:
            return ConfigValue(field_config["default"], SOURCE_DEFAULT)

        if parser and isinstance(value, str):
            value = getattr(self, parser)(value, field_name)

        expected_type = field_config["type"]

        # Skip type checking for protocol types (they can't be runtime checked)
        if not self._is_protocol_type(expected_type) and not isinstance(
            value, expected_type
        ):
            actual_name = type(value).__name__
            expected_name = getattr(expected_type, "__name__", str(expected_type))
            raise TypeError(f"{field_name} must be {expected_name}, got {actual_name}")

        return ConfigValue(value, source)

    def _is_protocol_type(self, type_hint: Any) -> bool:
        """Check if a type hint contains protocol types that can't be runtime checked"""
        if hasattr(type_hint, "__args__"):
            return any(self._is_protocol_type(arg) for arg in type_hint.__args__)
        return getattr(type_hint, "_is_protocol", False)

    def _parse_bool(self, value: str, field_name: str) -> bool:
        normalized = value.strip().lower()
        if normalized in _TRUE_STRINGS:
            return True
        if normalized in _FALSE_STRINGS:
            return False
        raise ValueError(f"{field_name} must be a boolean, got {value!r}")

    def _parse_float(self, value: str, field_name: str) -> float:
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{field_name} must be a number, got {value!r}") from None

    def get_config_value_object(self, field_name: str) -> ConfigValue:
        """Get the raw ConfigValue object for a field"""
        if not self._resolved:
            raise RuntimeError("Config must be resolved before accessing values")
        return getattr(self, f"_{field_name}")

    def __getattr__(self, name: str) -> Any:
        # Only reached for value slots that neither resolve() nor a setter filled.
        if name.startswith("_") and name[1:] in self.CONFIG_FIELDS:
            raise RuntimeError(
                f"Config must be resolved before accessing {name[1:]}. "
                "Call resolve() or assign the value first."
            )
        raise AttributeError(
            f"{type(self).__name__!r} object has no attribute {name!r}"
        )

    @property
    def aws_access_key_id(self) -> str | None:
        return self._aws_access_key_id.value

    @aws_access_key_id.setter
    def aws_access_key_id(self, value: str | None) -> None:
        self._aws_access_key_id = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_secret_access_key(self) -> str | None:
        return self._aws_secret_access_key.value

    @aws_secret_access_key.setter
    def aws_secret_access_key(self, value: str | None) -> None:
        self._aws_secret_access_key = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_session_token(self) -> str | None:
        return self._aws_session_token.value

    @aws_session_token.setter
    def aws_session_token(self, value: str | None) -> None:
        self._aws_session_token = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def cloudfront_host(self) -> str:
        return self._cloudfront_host.value

    @cloudfront_host.setter
    def cloudfront_host(self, value: str) -> None:
        self._cloudfront_host = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def retry(self) -> bool:
        return self._retry.value

    @retry.setter
    def retry(self, value: bool) -> None:
        self._retry = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def fatal(self) -> bool:
        return self._fatal.value

    @fatal.setter
    def fatal(self, value: bool) -> None:
        self._fatal = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def timeout(self) -> float | None:
        return self._timeout.value

    @timeout.setter
    def timeout(self, value: float | None) -> None:
        self._timeout = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def date(self) -> str | None:
        return self._date.value

    @date.setter
    def date(self, value: str | None) -> None:
        self._date = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def proxy(self) -> str | None:
        return self._proxy.value

    @proxy.setter
    def proxy(self, value: str | None) -> None:
        self._proxy = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def retry_strategy(self) -> RetryStrategy | None:
        return self._retry_strategy.value

    @retry_strategy.setter
    def retry_strategy(self, value: RetryStrategy | None) -> None:
        self._retry_strategy = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def http_client(self) -> HTTPClient | None:
        return self._http_client.value

    @http_client.setter
    def http_client(self, value: HTTPClient | None) -> None:
        self._http_client = ConfigValue(value, SOURCE_IN_CODE_UPDATE)
