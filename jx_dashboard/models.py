"""
Core data models for jx-dashboard

These models carry the launch options and the cluster objects the launcher
reads (Services, Ingresses, Secrets) in a normalized form.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SERVICE_NAME = "jx-pipelines-visualizer"
DEFAULT_SECRET_NAME = "jx-basic-auth-user-password"


class LaunchOptions(BaseModel):
    """Options for a single dashboard invocation"""

    service_name: str = Field(default=DEFAULT_SERVICE_NAME, description="Name of the dashboard Service")
    secret_name: str = Field(default=DEFAULT_SECRET_NAME, description="Secret holding basic auth login/password")
    namespace: Optional[str] = Field(default=None, description="Resolved lazily when not given")
    context: Optional[str] = Field(default=None, description="kubectl context")
    no_browser: bool = Field(default=False, description="Only show the URL on the console")
    quiet: bool = False


class KubeTarget(BaseModel):
    """Namespace and context every kubectl call is scoped to"""

    namespace: str
    context: Optional[str] = None

    def kubectl_args(self) -> List[str]:
        """Generate kubectl arguments for this target"""
        args = []
        if self.context:
            args.extend(['--context', self.context])
        if self.namespace:
            args.extend(['--namespace', self.namespace])
        return args


class Credential(BaseModel):
    """Basic auth login read from a Secret

    Either field may be missing; an incomplete credential is never merged
    into a URL.
    """

    model_config = ConfigDict(hide_input_in_errors=True)

    username: bytes = b""
    password: bytes = Field(default=b"", repr=False)

    @field_validator('username', 'password', mode='before')
    @classmethod
    def none_is_empty(cls, v):
        """Secret data arrives as raw bytes; text is accepted as UTF-8"""
        if v is None:
            return b""
        return v

    @property
    def missing_field(self) -> Optional[str]:
        """Name of the first empty field, or None when complete"""
        if not self.username:
            return "username"
        if not self.password:
            return "password"
        return None

    @property
    def is_complete(self) -> bool:
        return self.missing_field is None


class ServicePort(BaseModel):
    name: Optional[str] = None
    port: int
    protocol: str = "TCP"


class ServiceRecord(BaseModel):
    """Normalized view of a Kubernetes Service"""

    name: str
    namespace: Optional[str] = None
    type: str = "ClusterIP"
    annotations: Dict[str, str] = Field(default_factory=dict)
    ports: List[ServicePort] = Field(default_factory=list)
    load_balancer_addresses: List[str] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        if self.namespace:
            return f"Service/{self.namespace}/{self.name}"
        return f"Service/{self.name}"


class IngressRule(BaseModel):
    host: Optional[str] = None
    path: Optional[str] = None


class IngressRecord(BaseModel):
    """Normalized view of a Kubernetes Ingress"""

    name: str
    namespace: Optional[str] = None
    rules: List[IngressRule] = Field(default_factory=list)
    tls_hosts: List[str] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        if self.namespace:
            return f"Ingress/{self.namespace}/{self.name}"
        return f"Ingress/{self.name}"
