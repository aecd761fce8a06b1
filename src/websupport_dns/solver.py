"""DNS-01 challenge solver — present and clean up TXT records at Websupport."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from websupport_dns.client import WebsupportClient
from websupport_dns.config import AppConfig, SolverConfig
from websupport_dns.errors import ConfigError
from websupport_dns.models import ChallengeRequest, Credentials

logger = logging.getLogger(__name__)

SecretLoader = Callable[[str, str], Mapping[str, bytes | str]]


def _secret_value(data: Mapping[str, bytes | str], key: str) -> str:
    value = data.get(key, "")
    if isinstance(value, bytes):
        return value.decode()
    return value


class WebsupportSolver:
    """Adapter between the issuance controller's challenge requests and the Websupport client.

    A fresh client is built for every call from the credentials that come
    with the request, so solvers for different issuers never share state.

    Args:
        config: Process configuration (API URL, timeout, record TTL).
        secret_loader: Called as ``secret_loader(namespace, name)`` to fetch
            the data of a secret referenced by ``apiKeySecretRef``.
    """

    name = "websupport-solver"

    def __init__(
        self,
        config: AppConfig,
        secret_loader: SecretLoader | None = None,
        _client_factory: Callable[..., WebsupportClient] = WebsupportClient,
    ) -> None:
        self._config = config
        self._secret_loader = secret_loader
        self._client_factory = _client_factory

    @property
    def group_name(self) -> str:
        """API group to register this solver under, together with :attr:`name`."""
        return self._config.group_name

    def load_config(self, request: ChallengeRequest) -> Credentials:
        """Resolve the API credentials for ``request``."""
        cfg = SolverConfig.from_dict(request.config)
        api_key, api_secret = cfg.api_key, cfg.api_secret

        secret_name = cfg.api_key_secret_ref.name
        if secret_name:
            namespace = request.resource_namespace
            if self._secret_loader is None:
                raise ConfigError(f"Secret {namespace}/{secret_name} is referenced but no secret loader is configured")
            try:
                data = self._secret_loader(namespace, secret_name)
            except Exception as exc:
                raise ConfigError(f"failed to load secret {namespace}/{secret_name}: {exc}") from exc
            api_key = _secret_value(data, "ApiKey")
            api_secret = _secret_value(data, "ApiSecret")

        if not api_key or not api_secret:
            raise ConfigError("ApiKey and ApiSecret are required in the solver config or referenced secret")
        return Credentials(api_key=api_key, api_secret=api_secret)

    def _client(self, request: ChallengeRequest) -> WebsupportClient:
        return self._client_factory(
            self.load_config(request),
            base_url=self._config.api_url,
            timeout=self._config.request_timeout,
            challenge_ttl=self._config.record_ttl,
        )

    def present(self, request: ChallengeRequest) -> None:
        """Create the challenge record. Safe to call more than once with the same request."""
        with self._client(request) as client:
            logger.info("Attempting to create record for '%s' with content '%s'", request.resolved_fqdn, request.key)
            client.present(request.resolved_fqdn, request.key)

    def clean_up(self, request: ChallengeRequest) -> None:
        """Delete only the record carrying this request's key.

        Other challenges for the same name keep their records.
        """
        with self._client(request) as client:
            logger.info("Attempting to delete record '%s' with content '%s'", request.resolved_fqdn, request.key)
            client.clean_up(request.resolved_fqdn, request.key)
