"""
Implementation of the dashboard command

DashboardLauncher resolves the dashboard URL, merges the basic auth login
into it and hands it to an Opener.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import structlog

from ..collectors.base import CollectorError, KubectlClient, ResourceNotFoundError, create_client
from ..credentials import credential_from_secret, fetch_secret_data
from ..errors import ServiceNotFoundError
from ..models import LaunchOptions
from ..opener import BrowserOpener, Opener
from ..parsers.base import ParserError
from ..renderers.terminal import TerminalRenderer
from ..services import find_service_url
from ..urls import redact_userinfo, with_userinfo

logger = structlog.get_logger(__name__)

CHART_HINT = "Check you have 'chart: jxgh/jx-pipelines-visualizer' in your helmfile.yaml"

ClientFactory = Callable[..., Awaitable[KubectlClient]]


@dataclass
class CommandResult:
    """Result of command execution"""
    output: str
    url: str = ""


class DashboardLauncher:
    """Opens (or prints) the URL of the dashboard service

    Args:
        options: What to resolve and how to present it
        client: Pre-built cluster client; created lazily when None
        opener: Opener to launch the URL with; a BrowserOpener when None
        renderer: Console renderer for the URL line
        client_factory: Coroutine building a client from namespace/context
        timeout_seconds: Deadline of each kubectl call
    """

    def __init__(
        self,
        options: Optional[LaunchOptions] = None,
        client: Optional[Any] = None,
        opener: Optional[Opener] = None,
        renderer: Optional[TerminalRenderer] = None,
        client_factory: ClientFactory = create_client,
        timeout_seconds: float = 10.0,
    ):
        self.options = options or LaunchOptions()
        self.client = client
        self.opener = opener
        self.renderer = renderer or TerminalRenderer()
        self.client_factory = client_factory
        self.timeout_seconds = timeout_seconds

    async def _lazy_client(self):
        if self.client is None:
            self.client = await self.client_factory(
                namespace=self.options.namespace,
                context=self.options.context,
                timeout_seconds=self.timeout_seconds,
            )
        self.options.namespace = self.client.namespace
        return self.client

    async def run(self) -> CommandResult:
        """Resolve the dashboard URL then print or open it

        Raises:
            ClientInitError: When no cluster client can be created
            ServiceNotFoundError: When the service has no reachable URL
            SecretFetchError: When the basic auth Secret cannot be read
            URLParseError: When the resolved URL is malformed
            DashboardError: Whatever the Opener raises
        """
        client = await self._lazy_client()
        name = self.options.service_name

        try:
            url = await find_service_url(client, name)
        except (CollectorError, ParserError) as e:
            raise ServiceNotFoundError(f"failed to find dashboard URL. {CHART_HINT}: {e}") from e
        if not url:
            raise ServiceNotFoundError(f"no dashboard URL. {CHART_HINT}")

        logger.info("Jenkins X dashboard is running", url=url, service=name, namespace=client.namespace)

        output = ""
        if self.options.no_browser or not self.options.quiet:
            output = self.renderer.render_url(url)

        if self.options.no_browser:
            return CommandResult(output=output, url=url)

        url = await self.add_user_password_to_url(url, self.options.secret_name)

        logger.debug("opening", url=redact_userinfo(url))

        if self.opener is None:
            self.opener = BrowserOpener(url)
        else:
            self.opener.url = url
        self.opener.open()

        return CommandResult(output=output, url=url)

    async def add_user_password_to_url(self, url: str, secret_name: str) -> str:
        """Merge the login stored in Secret `secret_name` into `url`

        A missing Secret, or one without a username or password, leaves the
        URL unchanged.

        Raises:
            SecretFetchError: When the Secret cannot be read
            URLParseError: When `url` is malformed
        """
        client = await self._lazy_client()
        ns = client.namespace

        try:
            data = await fetch_secret_data(client, secret_name)
        except ResourceNotFoundError:
            logger.debug("No basic auth secret", secret=secret_name, namespace=ns)
            return url

        credential = credential_from_secret(data)
        missing = credential.missing_field
        if missing:
            logger.warning(f"secret {secret_name} in namespace {ns} has no {missing}",
                           secret=secret_name, namespace=ns)
            return url

        return with_userinfo(url, credential)
