"""
Parsers for the kubectl JSON the launcher reads

Parsers convert raw `kubectl get -o json` documents into the models in
jx_dashboard.models. They are deterministic and side-effect free.
"""

import base64
import binascii
from typing import Any, Dict, List

import structlog

from ..models import IngressRecord, IngressRule, ServicePort, ServiceRecord

logger = structlog.get_logger(__name__)


class ParserError(Exception):
    """Raised when a document cannot be parsed"""
    pass


def _safe_get(data: Dict[str, Any], path: str, default: Any = None) -> Any:
    """Safely get nested dictionary value using dot notation"""
    keys = path.split('.')
    value = data

    try:
        for key in keys:
            if isinstance(value, dict):
                value = value[key]
            elif isinstance(value, list) and key.isdigit():
                value = value[int(key)]
            else:
                return default
        return value
    except (KeyError, IndexError, TypeError, ValueError):
        return default


def _expect_kind(data: Dict[str, Any], kind: str) -> None:
    if not isinstance(data, dict):
        raise ParserError(f"Expected a {kind} object, got {type(data).__name__}")
    actual = data.get('kind')
    if actual and actual != kind:
        raise ParserError(f"Expected a {kind} object, got {actual}")


def parse_service(data: Dict[str, Any]) -> ServiceRecord:
    """Parse a Service document"""
    _expect_kind(data, 'Service')

    ports = []
    for port in _safe_get(data, 'spec.ports', []) or []:
        if port.get('port') is None:
            continue
        ports.append(ServicePort(
            name=port.get('name'),
            port=int(port['port']),
            protocol=port.get('protocol', 'TCP'),
        ))

    addresses = []
    for entry in _safe_get(data, 'status.loadBalancer.ingress', []) or []:
        address = entry.get('ip') or entry.get('hostname')
        if address:
            addresses.append(address)

    return ServiceRecord(
        name=_safe_get(data, 'metadata.name', ''),
        namespace=_safe_get(data, 'metadata.namespace'),
        type=_safe_get(data, 'spec.type', 'ClusterIP'),
        annotations=_safe_get(data, 'metadata.annotations', {}) or {},
        ports=ports,
        load_balancer_addresses=addresses,
    )


def parse_ingress(data: Dict[str, Any]) -> IngressRecord:
    """Parse an Ingress document (networking.k8s.io/v1 or older)"""
    _expect_kind(data, 'Ingress')

    rules = []
    for rule in _safe_get(data, 'spec.rules', []) or []:
        paths = _safe_get(rule, 'http.paths', []) or []
        path = paths[0].get('path') if paths else None
        rules.append(IngressRule(host=rule.get('host'), path=path))

    tls_hosts: List[str] = []
    for tls in _safe_get(data, 'spec.tls', []) or []:
        tls_hosts.extend(tls.get('hosts') or [])

    return IngressRecord(
        name=_safe_get(data, 'metadata.name', ''),
        namespace=_safe_get(data, 'metadata.namespace'),
        rules=rules,
        tls_hosts=tls_hosts,
    )


def parse_secret_data(data: Dict[str, Any]) -> Dict[str, bytes]:
    """Decode a Secret's data into a key to bytes mapping

    stringData entries (only present on objects that were never persisted)
    take precedence over data entries with the same key.
    """
    _expect_kind(data, 'Secret')

    decoded: Dict[str, bytes] = {}
    for key, value in (data.get('data') or {}).items():
        try:
            decoded[key] = base64.b64decode(value or '', validate=True)
        except (binascii.Error, ValueError) as e:
            raise ParserError(f"Secret key {key} is not valid base64: {e}")

    for key, value in (data.get('stringData') or {}).items():
        decoded[key] = (value or '').encode('utf-8')

    logger.debug("Parsed secret", keys=sorted(decoded))
    return decoded
