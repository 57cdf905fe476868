"""
kubectl-backed cluster client

The client wraps the kubectl executable: it locates it, resolves the target
namespace lazily and runs time-bounded `kubectl get ... -o json` calls.
Failures are classified so callers can tell a missing object apart from
an access or transport problem.
"""

import asyncio
import json
import shutil
from typing import Any, Dict, List, Optional

import structlog
from async_timeout import timeout

from ..errors import ClientInitError
from ..models import KubeTarget

logger = structlog.get_logger(__name__)

DEFAULT_NAMESPACE = "default"


class CollectorError(Exception):
    """Base exception for cluster access errors"""
    pass


class KubectlTimeoutError(CollectorError):
    """Raised when a kubectl command exceeds its deadline"""
    pass


class KubectlError(CollectorError):
    """Raised when kubectl command fails"""
    pass


class ResourceNotFoundError(KubectlError):
    """Raised when the requested object does not exist"""
    pass


class RBACError(KubectlError):
    """Raised when RBAC permissions are insufficient"""
    pass


_RBAC_PHRASES = ('forbidden', 'unauthorized', 'access denied', 'permission denied')


def classify_kubectl_failure(stderr: str) -> KubectlError:
    """Map kubectl stderr onto the matching exception type"""
    lower = stderr.lower()
    if '(notfound)' in lower:
        return ResourceNotFoundError(stderr.strip())
    if any(phrase in lower for phrase in _RBAC_PHRASES):
        return RBACError(f"RBAC permission denied: {stderr.strip()}")
    return KubectlError(stderr.strip() or "Unknown error")


class KubectlClient:
    """Thin async client over the kubectl CLI

    Every call is scoped to the client's KubeTarget and bounded by
    timeout_seconds. Nothing is retried.
    """

    def __init__(
        self,
        target: KubeTarget,
        kubectl_path: str = "kubectl",
        timeout_seconds: float = 10.0,
    ):
        self.target = target
        self.kubectl_path = kubectl_path
        self.timeout_seconds = timeout_seconds

    @property
    def namespace(self) -> str:
        return self.target.namespace

    async def run(self, args: List[str], scoped: bool = True) -> str:
        """Run kubectl and return its stdout

        Args:
            args: kubectl command arguments
            scoped: Append the target's --context/--namespace arguments

        Raises:
            KubectlTimeoutError: When the command exceeds the deadline
            KubectlError: When kubectl exits non-zero
        """
        cmd = [self.kubectl_path] + args
        if scoped:
            cmd += self.target.kubectl_args()

        logger.debug("Running kubectl command", cmd=cmd, timeout=self.timeout_seconds)

        process = None
        try:
            async with timeout(self.timeout_seconds):
                process = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE
                )
                stdout, stderr = await process.communicate()
        except asyncio.TimeoutError:
            if process is not None and process.returncode is None:
                process.kill()
                await process.wait()
            raise KubectlTimeoutError(f"kubectl command timed out after {self.timeout_seconds}s")

        if process.returncode != 0:
            raise classify_kubectl_failure(stderr.decode() if stderr else "")
        return stdout.decode()

    async def get_json(self, resource_type: str, name: str) -> Dict[str, Any]:
        """Fetch a single object as parsed JSON

        Raises:
            ResourceNotFoundError: When the object does not exist
            CollectorError: When the call or JSON decoding fails
        """
        output = await self.run(['get', resource_type, name, '-o', 'json'])
        if not output.strip():
            raise ResourceNotFoundError(f"{resource_type} {name} not found in namespace {self.namespace}")
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise CollectorError(f"Failed to parse kubectl JSON output: {e}")


def find_kubectl() -> str:
    """Locate kubectl on the PATH"""
    path = shutil.which('kubectl')
    if not path:
        raise ClientInitError(
            "kubectl not found in PATH. Please install it to continue: "
            "https://kubernetes.io/docs/tasks/tools/"
        )
    return path


async def current_namespace(kubectl_path: str, context: Optional[str] = None,
                            timeout_seconds: float = 10.0) -> str:
    """Namespace of the current (or given) kubeconfig context"""
    args = ['config', 'view', '--minify', '-o', 'jsonpath={..namespace}']
    if context:
        args.extend(['--context', context])
    probe = KubectlClient(KubeTarget(namespace=DEFAULT_NAMESPACE), kubectl_path, timeout_seconds)
    output = await probe.run(args, scoped=False)
    return output.strip() or DEFAULT_NAMESPACE


async def create_client(
    namespace: Optional[str] = None,
    context: Optional[str] = None,
    timeout_seconds: float = 10.0,
) -> KubectlClient:
    """Create a client and resolve its namespace lazily

    An explicit namespace wins; otherwise the kubeconfig context namespace
    is used, falling back to "default".

    Raises:
        ClientInitError: When kubectl is missing or the kubeconfig cannot be read
    """
    kubectl_path = find_kubectl()
    if not namespace:
        try:
            namespace = await current_namespace(kubectl_path, context, timeout_seconds)
        except CollectorError as e:
            raise ClientInitError(f"creating kubernetes client: {e}") from e
    logger.debug("Created kubectl client", namespace=namespace, context=context)
    return KubectlClient(KubeTarget(namespace=namespace, context=context), kubectl_path, timeout_seconds)
