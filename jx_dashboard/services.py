"""
Service URL resolution

Finds the externally reachable URL of a named Service. Sources are tried in
order: an expose annotation on the Service, an Ingress with the same name,
then the Service's LoadBalancer address.
"""

from typing import Optional

import structlog

from .collectors.base import KubectlClient, ResourceNotFoundError
from .models import IngressRecord, ServiceRecord
from .parsers.base import parse_ingress, parse_service

logger = structlog.get_logger(__name__)

EXPOSE_URL_ANNOTATIONS = (
    "fabric8.io/exposeUrl",
    "jenkins-x.io/exposeUrl",
)


def service_annotation_url(service: ServiceRecord) -> str:
    """URL published on the Service by an expose controller, if any"""
    for key in EXPOSE_URL_ANNOTATIONS:
        value = service.annotations.get(key, "").strip()
        if value:
            return value
    return ""


def ingress_url(ingress: IngressRecord) -> str:
    """URL of the first Ingress rule that has a host"""
    for rule in ingress.rules:
        if not rule.host:
            continue
        scheme = "https" if rule.host in ingress.tls_hosts else "http"
        url = f"{scheme}://{rule.host}"
        if rule.path and rule.path != "/":
            url += "/" + rule.path.lstrip("/")
        return url
    return ""


def load_balancer_url(service: ServiceRecord) -> str:
    if service.type != "LoadBalancer" or not service.load_balancer_addresses:
        return ""
    address = service.load_balancer_addresses[0]
    if ":" in address:
        address = f"[{address}]"
    port = service.ports[0].port if service.ports else 80
    if port == 443:
        return f"https://{address}"
    if port == 80:
        return f"http://{address}"
    return f"http://{address}:{port}"


async def get_service(client: KubectlClient, name: str) -> Optional[ServiceRecord]:
    try:
        data = await client.get_json("service", name)
    except ResourceNotFoundError:
        logger.debug("Service not found", service=name, namespace=client.namespace)
        return None
    return parse_service(data)


async def get_ingress(client: KubectlClient, name: str) -> Optional[IngressRecord]:
    try:
        data = await client.get_json("ingress", name)
    except ResourceNotFoundError:
        logger.debug("Ingress not found", ingress=name, namespace=client.namespace)
        return None
    return parse_ingress(data)


async def find_service_url(client: KubectlClient, name: str) -> str:
    """Resolve the external URL of Service `name` in the client's namespace

    Returns:
        The URL, or "" when nothing exposes the service

    Raises:
        CollectorError: When kubectl fails for any reason other than not found
        ParserError: When kubectl returns an unexpected document
    """
    service = await get_service(client, name)
    if service:
        url = service_annotation_url(service)
        if url:
            logger.debug("Found service URL from annotation", service=service.full_name, url=url)
            return url

    ingress = await get_ingress(client, name)
    if ingress:
        url = ingress_url(ingress)
        if url:
            logger.debug("Found service URL from ingress", ingress=ingress.full_name, url=url)
            return url

    if service:
        url = load_balancer_url(service)
        if url:
            logger.debug("Found service URL from load balancer", service=service.full_name, url=url)
            return url

    return ""
