"""
Input validation for jx-dashboard

User supplied names end up as kubectl arguments, so they are checked against
the Kubernetes naming rules before any cluster call is made.
"""

import re
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


class ValidationError(Exception):
    """Raised when input validation fails"""
    pass


class InputValidator:
    """Validates user inputs before processing"""

    # Kubernetes naming rules (RFC 1123)
    # - lowercase alphanumeric + hyphens (+ dots for subdomain names)
    # - start and end with alphanumeric
    # - max 253 characters for subdomain names, 63 for labels

    RESOURCE_NAME_PATTERN = re.compile(r'^[a-z0-9]([-a-z0-9.]*[a-z0-9])?$')
    SERVICE_NAME_PATTERN = re.compile(r'^[a-z]([-a-z0-9]*[a-z0-9])?$')
    NAMESPACE_PATTERN = re.compile(r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?$')
    CONTEXT_PATTERN = re.compile(r'^[a-zA-Z0-9]([-a-zA-Z0-9._@:/]*[a-zA-Z0-9])?$')

    MAX_RESOURCE_NAME_LENGTH = 253
    MAX_LABEL_LENGTH = 63
    MAX_CONTEXT_LENGTH = 253

    @classmethod
    def _check(cls, value: str, what: str, pattern: re.Pattern, max_length: int) -> str:
        if not value:
            raise ValidationError(f"{what} cannot be empty")

        if len(value) > max_length:
            raise ValidationError(
                f"{what} too long: {len(value)} chars (max {max_length})"
            )

        if not pattern.match(value):
            raise ValidationError(
                f"Invalid {what.lower()} '{value}': must match pattern {pattern.pattern}"
            )

        return value

    @classmethod
    def validate_service_name(cls, name: str) -> str:
        """Validate a Service name (RFC 1035 label)

        Raises:
            ValidationError: If name is invalid
        """
        return cls._check(name, "Service name", cls.SERVICE_NAME_PATTERN, cls.MAX_LABEL_LENGTH)

    @classmethod
    def validate_secret_name(cls, name: str) -> str:
        """Validate a Secret name (RFC 1123 subdomain)

        Raises:
            ValidationError: If name is invalid
        """
        return cls._check(name, "Secret name", cls.RESOURCE_NAME_PATTERN, cls.MAX_RESOURCE_NAME_LENGTH)

    @classmethod
    def validate_namespace(cls, namespace: Optional[str]) -> Optional[str]:
        """Validate a namespace; None means "resolve from kubeconfig"

        Raises:
            ValidationError: If namespace is invalid
        """
        if namespace is None:
            return None
        return cls._check(namespace, "Namespace", cls.NAMESPACE_PATTERN, cls.MAX_LABEL_LENGTH)

    @classmethod
    def validate_context(cls, context: Optional[str]) -> Optional[str]:
        """Validate a kubectl context name; None means the current context

        Raises:
            ValidationError: If context is invalid
        """
        if context is None:
            return None
        return cls._check(context, "Context", cls.CONTEXT_PATTERN, cls.MAX_CONTEXT_LENGTH)


def validate_inputs(
    service_name: str,
    secret_name: str,
    namespace: Optional[str] = None,
    context: Optional[str] = None,
) -> None:
    """Validate the options of the dashboard command

    Raises:
        ValidationError: If any input is invalid
    """
    try:
        InputValidator.validate_service_name(service_name)
        InputValidator.validate_secret_name(secret_name)
        InputValidator.validate_namespace(namespace)
        InputValidator.validate_context(context)
    except ValidationError as e:
        logger.error("Input validation failed", error=str(e))
        raise
