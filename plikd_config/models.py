"""The plikd configuration model.

A ``Configuration`` is built with compiled-in defaults, optionally overwritten
from a configuration file and/or the process environment, then validated with
``initialize()``. Validation computes the derived values consumers rely on
(compiled upload whitelist, parsed URLs) once, at startup.

Attributes are snake_case; each carries an alias equal to its external
identifier (configuration file key, input of the environment variable name
mapping). Assignment is not re-validated: callers may mutate fields and call
``initialize()`` again. Once handed to consumers the object is treated as
read-only.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union
from urllib.parse import SplitResult

from pydantic import BaseModel, ConfigDict, Field, JsonValue, PrivateAttr

from .durations import format_size, format_ttl, parse_size, parse_ttl
from .errors import ConfigValidationError
from .urls import EMPTY_URL, build_server_url, parse_absolute_url
from .whitelist import IPAddress, IPNetwork, compile_whitelist, is_whitelisted

_logger = logging.getLogger(__name__)

DAY_SECONDS = 86400
DEFAULT_TTL_SECONDS = 30 * DAY_SECONDS
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024 * 1024  # 10 GiB

_REDACTED = "********"


class Configuration(BaseModel):
    """plikd server configuration."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # General
    debug: bool = Field(default=False, alias="Debug")
    debug_requests: bool = Field(default=False, alias="DebugRequests")
    log_level: str = Field(default="INFO", alias="LogLevel")

    # Network
    listen_address: str = Field(default="127.0.0.1", alias="ListenAddress")
    listen_port: int = Field(default=8080, alias="ListenPort")
    path: str = Field(default="", alias="Path")
    ssl_enabled: bool = Field(default=False, alias="SslEnabled")
    ssl_cert: str = Field(default="plik.crt", alias="SslCert")
    ssl_key: str = Field(default="plik.key", alias="SslKey")
    no_web_interface: bool = Field(default=False, alias="NoWebInterface")
    download_domain: str = Field(default="", alias="DownloadDomain")
    enhanced_web_security: bool = Field(default=False, alias="EnhancedWebSecurity")
    source_ip_header: str = Field(default="", alias="SourceIPHeader")

    # Access control
    upload_whitelist: list[str] = Field(default_factory=list, alias="UploadWhitelist")

    # Limits
    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, alias="MaxFileSize")
    max_file_size_str: str = Field(default="", alias="MaxFileSizeStr")
    max_file_per_upload: int = Field(default=1000, alias="MaxFilePerUpload")
    # Seconds; negative means unbounded
    default_ttl: int = Field(default=DEFAULT_TTL_SECONDS, alias="DefaultTTL")
    max_ttl: int = Field(default=DEFAULT_TTL_SECONDS, alias="MaxTTL")
    default_ttl_str: str = Field(default="", alias="DefaultTTLStr")
    max_ttl_str: str = Field(default="", alias="MaxTTLStr")

    # Upload features
    one_shot: bool = Field(default=True, alias="OneShot")
    removable: bool = Field(default=True, alias="Removable")
    stream: bool = Field(default=True, alias="Stream")
    protected_by_password: bool = Field(default=True, alias="ProtectedByPassword")

    # Authentication
    authentication: bool = Field(default=False, alias="Authentication")
    no_anonymous_uploads: bool = Field(default=False, alias="NoAnonymousUploads")
    google_authentication: bool = Field(default=False, alias="GoogleAuthentication")
    google_api_client_id: str = Field(default="", alias="GoogleAPIClientID")
    google_api_secret: str = Field(default="", alias="GoogleAPISecret", repr=False)
    google_valid_domains: list[str] = Field(default_factory=list, alias="GoogleValidDomains")
    ovh_authentication: bool = Field(default=False, alias="OvhAuthentication")
    ovh_api_key: str = Field(default="", alias="OvhAPIKey")
    ovh_api_secret: str = Field(default="", alias="OvhAPISecret", repr=False)
    ovh_api_endpoint: str = Field(default="https://eu.api.ovh.com/1.0", alias="OvhAPIEndpoint")

    # Backends
    metadata_backend: str = Field(default="bolt", alias="MetadataBackend")
    metadata_backend_config: dict[str, JsonValue] = Field(
        default_factory=dict, alias="MetadataBackendConfig"
    )
    data_backend: str = Field(default="file", alias="DataBackend")
    data_backend_config: dict[str, JsonValue] = Field(
        default_factory=dict, alias="DataBackendConfig"
    )

    abuse_contact: str = Field(default="", alias="AbuseContact")

    # Derived by initialize()
    _upload_whitelist: list[IPNetwork] = PrivateAttr(default_factory=list)
    _server_url: Optional[SplitResult] = PrivateAttr(default=None)
    _download_domain_url: Optional[SplitResult] = PrivateAttr(default=None)
    _clean: bool = PrivateAttr(default=True)

    # --- validation ---

    def initialize(self) -> None:
        """Validate the configuration and compute derived values.

        Idempotent; safe to call again after mutating fields. Stops at the
        first failure with a ``ConfigValidationError`` naming the field.
        """
        self._apply_human_readable_values()
        self._check_ttl_bounds()

        upload_whitelist = compile_whitelist(self.upload_whitelist)

        self.path = self.path.rstrip("/")
        if self.path and not self.path.startswith("/"):
            raise ConfigValidationError(
                f"path {self.path!r} must start with '/'", field="Path", value=self.path
            )
        try:
            server_url = build_server_url(
                tls=self.ssl_enabled,
                address=self.listen_address,
                port=self.listen_port,
                path=self.path,
            )
        except ValueError as exc:
            if not 0 <= self.listen_port <= 65535:
                field, value = "ListenPort", self.listen_port
            else:
                field, value = "ListenAddress", self.listen_address
            raise ConfigValidationError(f"invalid server URL: {exc}", field=field, value=value) from exc

        download_domain_url: Optional[SplitResult] = None
        if self.download_domain:
            self.download_domain = self.download_domain.rstrip("/")
            try:
                download_domain_url = parse_absolute_url(self.download_domain)
            except ValueError as exc:
                raise ConfigValidationError(
                    f"invalid download domain {self.download_domain!r}: {exc}",
                    field="DownloadDomain",
                    value=self.download_domain,
                ) from exc

        self.google_authentication = bool(self.google_api_client_id and self.google_api_secret)
        self.ovh_authentication = bool(self.ovh_api_key and self.ovh_api_secret)
        if self.no_anonymous_uploads and not self.authentication:
            raise ConfigValidationError(
                "NoAnonymousUploads requires Authentication to be enabled",
                field="NoAnonymousUploads",
                value=True,
            )

        if self.log_level.upper() == "DEBUG":
            self.debug = True

        self._upload_whitelist = upload_whitelist
        self._server_url = server_url
        self._download_domain_url = download_domain_url

        _logger.debug(
            "configuration initialized",
            extra={"server_url": self._server_url.geturl(), "whitelist_size": len(self._upload_whitelist)},
        )

    def _apply_human_readable_values(self) -> None:
        if self.max_file_size_str:
            try:
                self.max_file_size = parse_size(self.max_file_size_str)
            except ValueError as exc:
                raise ConfigValidationError(
                    str(exc), field="MaxFileSizeStr", value=self.max_file_size_str
                ) from exc
        for field, target in (("default_ttl_str", "default_ttl"), ("max_ttl_str", "max_ttl")):
            raw = getattr(self, field)
            if not raw:
                continue
            try:
                setattr(self, target, parse_ttl(raw))
            except ValueError as exc:
                alias = type(self).model_fields[field].alias
                raise ConfigValidationError(str(exc), field=alias, value=raw) from exc

    def _check_ttl_bounds(self) -> None:
        if self.max_ttl >= 0 and self.default_ttl > self.max_ttl:
            raise ConfigValidationError(
                f"default TTL ({self.default_ttl}s) must not exceed max TTL ({self.max_ttl}s)",
                field="DefaultTTL",
                value=self.default_ttl,
            )

    # --- accessors ---

    def is_whitelisted(self, address: Union[str, IPAddress, None]) -> bool:
        return is_whitelisted(self._upload_whitelist, address)

    def get_upload_whitelist(self) -> list[IPNetwork]:
        return list(self._upload_whitelist)

    def get_server_url(self) -> SplitResult:
        """Base URL of the server for the current field values.

        Never raises: returns the last validated URL (or an empty URL) when the
        current values do not compose.
        """
        try:
            return build_server_url(
                tls=self.ssl_enabled,
                address=self.listen_address,
                port=self.listen_port,
                path=self.path,
            )
        except ValueError:
            return self._server_url or EMPTY_URL

    def get_download_domain(self) -> SplitResult:
        """Download URL, falling back to the server URL when none is configured."""
        if self._download_domain_url is not None:
            return self._download_domain_url
        return self.get_server_url()

    def is_auto_clean(self) -> bool:
        return self._clean

    def auto_clean(self, value: bool) -> None:
        self._clean = value

    # --- representations ---

    def public_view(self) -> dict[str, Any]:
        """Settings clients are allowed to see."""
        return {
            "maxFileSize": self.max_file_size,
            "maxFilePerUpload": self.max_file_per_upload,
            "defaultTTL": self.default_ttl,
            "maxTTL": self.max_ttl,
            "oneShot": self.one_shot,
            "removable": self.removable,
            "stream": self.stream,
            "protectedByPassword": self.protected_by_password,
            "authentication": self.authentication,
            "noAnonymousUploads": self.no_anonymous_uploads,
            "googleAuthentication": self.google_authentication,
            "ovhAuthentication": self.ovh_authentication,
            "downloadDomain": self.download_domain,
            "abuseContact": self.abuse_contact,
        }

    def dump(self) -> str:
        lines = [
            f"Listening on {self.listen_address}:{self.listen_port}",
            f"Server URL : {self.get_server_url().geturl()}",
            f"Download URL : {self.get_download_domain().geturl()}",
            f"TLS : {'enabled' if self.ssl_enabled else 'disabled'}",
            f"Maximum file size : {format_size(self.max_file_size)}",
            f"Maximum files per upload : {self.max_file_per_upload}",
            f"Default TTL : {format_ttl(self.default_ttl)}",
            f"Maximum TTL : {format_ttl(self.max_ttl)}",
        ]
        if self.upload_whitelist:
            lines.append("Upload whitelist :")
            lines.extend(f"  - {entry}" for entry in self.upload_whitelist)
        else:
            lines.append("Upload whitelist : disabled")
        lines.append(f"Authentication : {'enabled' if self.authentication else 'disabled'}")
        if self.google_authentication:
            lines.append(
                f"Google authentication : client id {self.google_api_client_id}, secret {_REDACTED}"
            )
        if self.ovh_authentication:
            lines.append(
                f"OVH authentication : key {self.ovh_api_key}, secret {_REDACTED}, "
                f"endpoint {self.ovh_api_endpoint}"
            )
        lines.append(f"Metadata backend : {self.metadata_backend} {self.metadata_backend_config}")
        lines.append(f"Data backend : {self.data_backend} {self.data_backend_config}")
        lines.append(f"Auto clean : {'enabled' if self._clean else 'disabled'}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.dump()


def new_configuration() -> Configuration:
    """Return a configuration holding the default values (not validated)."""
    return Configuration()


__all__ = ["Configuration", "new_configuration", "DEFAULT_TTL_SECONDS", "DEFAULT_MAX_FILE_SIZE"]
